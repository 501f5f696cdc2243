from datetime import date, timedelta

import pytest

from policytracker.services import trends

from .conftest import make_policy


def test_events_skip_policies_without_the_criterion(sample_parties):
    labour = sample_parties[0]
    assert len(trends.events_for_criterion(labour.policies, "human_rights")) == 2
    assert len(trends.events_for_criterion(labour.policies, "economic_impact")) == 1
    assert trends.events_for_criterion(labour.policies, "inequality") == []


def test_cumulative_series_sorted_by_date(sample_parties):
    conservative = sample_parties[1]
    series = trends.cumulative_series(conservative.policies, "human_rights")
    assert [p.date for p in series] == [date(2023, 3, 7), date(2023, 12, 4)]
    assert series[0].score == 1.0
    assert series[1].score == pytest.approx((1 * 3 + 3 * 2) / 5)


def test_date_trend_with_few_points_returns_raw_scores(sample_parties):
    conservative = sample_parties[1]
    series = trends.date_trend(conservative.policies, "human_rights")
    assert [(p.date, p.score) for p in series] == [(date(2023, 3, 7), 1.0), (date(2023, 12, 4), 3.0)]


def _daily_policies(scores_and_weights):
    start = date(2024, 1, 1)
    return [
        make_policy(start + timedelta(days=i), f"policy {i}", human_rights=sw)
        for i, sw in enumerate(scores_and_weights)
    ]


def test_weighted_and_date_trends_diverge_when_weights_differ():
    policies = _daily_policies([(1, 1), (1, 1), (1, 1), (10, 3), (1, 1)])
    weighted = trends.weighted_trend(policies, "human_rights", 1.0)
    unweighted = trends.date_trend(policies, "human_rights", 1.0)

    assert [p.date for p in weighted] == [p.date for p in unweighted] == [pl.date_announced for pl in policies]
    assert abs(weighted[2].score - unweighted[2].score) > 0.1


def test_date_trend_equals_weighted_trend_with_uniform_weights():
    policies = _daily_policies([(2, 1), (8, 1), (5, 1), (6, 1), (3, 1), (9, 1)])
    weighted = trends.weighted_trend(policies, "human_rights", 0.5)
    unweighted = trends.date_trend(policies, "human_rights", 0.5)
    assert [p.score for p in weighted] == pytest.approx([p.score for p in unweighted])


def test_build_topic_trends(migration_dir):
    payload = trends.build_topic_trends("migration", data_dir=migration_dir)
    assert payload.criterion == "human_rights"
    assert payload.topic.topic_id == "migration"
    assert [p.party_name for p in payload.parties] == ["Labour", "Conservative"]

    labour = payload.parties[0]
    assert len(labour.cumulative) == len(labour.weighted_trend) == len(labour.date_trend) == 2
    assert labour.cumulative[-1].score == pytest.approx((9 * 3 + 4 * 2) / 5)


def test_build_topic_trends_party_filter_and_criterion(migration_dir):
    payload = trends.build_topic_trends(
        "migration", "economic_impact", party_name="conservative", data_dir=migration_dir
    )
    assert [p.party_name for p in payload.parties] == ["Conservative"]
    assert payload.parties[0].cumulative[0].score == 4.0


def test_build_topic_trends_rejects_bad_input(migration_dir):
    with pytest.raises(ValueError):
        trends.build_topic_trends("migration", "renters_rights", data_dir=migration_dir)
    with pytest.raises(ValueError):
        trends.build_topic_trends("migration", bandwidth=0, data_dir=migration_dir)
    with pytest.raises(FileNotFoundError):
        trends.build_topic_trends("housing", data_dir=migration_dir)
