from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter

from ..schemas import Party
from ..settings import settings
from .topic_config import get_topic_config

_PARTIES_ADAPTER = TypeAdapter(list[Party])


def topic_data_path(topic_id: str, data_dir: Path | None = None) -> Path:
    config = get_topic_config(topic_id)
    return Path(data_dir or settings.data_dir) / config.file


def load_parties(topic_id: str, data_dir: Path | None = None) -> list[Party]:
    path = topic_data_path(topic_id, data_dir)
    raw = path.read_text(encoding="utf-8")
    return _PARTIES_ADAPTER.validate_python(json.loads(raw))


def save_parties(topic_id: str, parties: list[Party], data_dir: Path | None = None) -> Path:
    path = topic_data_path(topic_id, data_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _PARTIES_ADAPTER.dump_python(parties, mode="json", exclude_none=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
