import pytest

from policytracker.services.topic_config import (
    TOPIC_CONFIGS,
    criterion_prompt,
    get_topic_config,
    list_topic_configs,
    resolve_criteria,
)


def test_topics_and_files():
    assert [c.topic_id for c in list_topic_configs()] == ["economic", "environmental", "housing", "migration"]
    assert get_topic_config("housing").file == "policies-housing.json"
    assert get_topic_config(" Migration ").criterion_keys == ["human_rights", "economic_impact"]


def test_unknown_topic_lists_available():
    with pytest.raises(ValueError) as exc:
        get_topic_config("defence")
    assert "migration" in str(exc.value)


def test_resolve_criteria_defaults_to_all():
    config = get_topic_config("environmental")
    assert resolve_criteria(config, None) == ["climate_impact", "biodiversity"]
    assert resolve_criteria(config, ["", " "]) == ["climate_impact", "biodiversity"]


def test_resolve_criteria_validates_and_dedupes():
    config = get_topic_config("housing")
    assert resolve_criteria(config, ["renters_rights", "renters_rights"]) == ["renters_rights"]
    with pytest.raises(ValueError) as exc:
        resolve_criteria(config, ["human_rights"])
    assert "price_impact" in str(exc.value)


def test_every_criterion_has_a_prompt():
    for config in TOPIC_CONFIGS.values():
        for key in config.criterion_keys:
            assert "Weight (1-3)" in criterion_prompt(key)
