from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dprint(enabled: bool, *parts: object) -> None:
    if not enabled:
        return
    print(*parts)


def save_json(enabled: bool, path: Path, data: Any) -> None:
    if not enabled:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
