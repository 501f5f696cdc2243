from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..agents.prompting import load_prompt


@dataclass(frozen=True)
class CriterionConfig:
    key: str
    label: str


@dataclass(frozen=True)
class TopicConfig:
    topic_id: str
    label: str
    file: str
    criteria: tuple[CriterionConfig, ...]

    @property
    def criterion_keys(self) -> list[str]:
        return [c.key for c in self.criteria]


TOPIC_CONFIGS: dict[str, TopicConfig] = {
    "migration": TopicConfig(
        topic_id="migration",
        label="Migration",
        file="policies-migration.json",
        criteria=(
            CriterionConfig(key="human_rights", label="Human rights"),
            CriterionConfig(key="economic_impact", label="Economic impact"),
        ),
    ),
    "environmental": TopicConfig(
        topic_id="environmental",
        label="Environment",
        file="policies-environmental.json",
        criteria=(
            CriterionConfig(key="climate_impact", label="Climate impact"),
            CriterionConfig(key="biodiversity", label="Biodiversity"),
        ),
    ),
    "economic": TopicConfig(
        topic_id="economic",
        label="Economy",
        file="policies-economic.json",
        criteria=(
            CriterionConfig(key="inequality", label="Inequality"),
            CriterionConfig(key="economic_democracy", label="Economic democracy"),
        ),
    ),
    "housing": TopicConfig(
        topic_id="housing",
        label="Housing",
        file="policies-housing.json",
        criteria=(
            CriterionConfig(key="price_impact", label="Price impact"),
            CriterionConfig(key="renters_rights", label="Renters' rights"),
        ),
    ),
}


def list_topic_configs() -> list[TopicConfig]:
    return [TOPIC_CONFIGS[k] for k in sorted(TOPIC_CONFIGS)]


def get_topic_config(topic_id: str) -> TopicConfig:
    key = (topic_id or "").strip().lower()
    config = TOPIC_CONFIGS.get(key)
    if config is None:
        raise ValueError(f'Unknown topic "{topic_id}". Available topics: {", ".join(sorted(TOPIC_CONFIGS))}')
    return config


def resolve_criteria(config: TopicConfig, requested: Iterable[str] | None) -> list[str]:
    """指定されたクライテリアを検証して返す。未指定ならトピックの全クライテリア。"""

    keys = [c.strip() for c in (requested or []) if c and c.strip()]
    if not keys:
        return config.criterion_keys

    available = config.criterion_keys
    for key in keys:
        if key not in available:
            raise ValueError(
                f'Invalid criterion "{key}" for topic "{config.topic_id}". '
                f'Available criteria: {", ".join(available)}'
            )
    # 重複は先勝ちで除く
    return list(dict.fromkeys(keys))


def criterion_prompt(criterion_key: str) -> str:
    return load_prompt(f"criteria/{criterion_key}.txt")
