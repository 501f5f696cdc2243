from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path

from ..schemas import (
    AveragePointOut,
    Criterion,
    Party,
    PartyTrends,
    Policy,
    Topic,
    TopicTrendsResponse,
    TrendPointOut,
)
from . import policy_store
from .statistics import Point, ScoredEvent, cumulative_weighted_average, weighted_loess
from .topic_config import TopicConfig, get_topic_config, resolve_criteria

# 日付トレンドはこれ未満の件数では平滑化せず生スコアを返す
MIN_POINTS_FOR_DATE_TREND = 3


def _to_epoch(d: date) -> float:
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc).timestamp()


def _from_epoch(x: float) -> date:
    return datetime.fromtimestamp(x, tz=timezone.utc).date()


def topic_schema(config: TopicConfig) -> Topic:
    return Topic(
        topic_id=config.topic_id,
        label=config.label,
        criteria=[Criterion(key=c.key, label=c.label) for c in config.criteria],
    )


def events_for_criterion(policies: list[Policy], criterion: str) -> list[ScoredEvent]:
    """指定クライテリアのスコアを持つ政策だけをイベント列にする。"""

    events: list[ScoredEvent] = []
    for p in policies:
        s = p.scores.get(criterion)
        if s is None:
            continue
        events.append(ScoredEvent(date=p.date_announced, value=float(s.score), weight=float(s.weight)))
    return events


def cumulative_series(policies: list[Policy], criterion: str) -> list[AveragePointOut]:
    return [
        AveragePointOut(date=pt.date, score=pt.score)
        for pt in cumulative_weighted_average(events_for_criterion(policies, criterion))
    ]


def weighted_trend(policies: list[Policy], criterion: str, bandwidth: float = 0.25) -> list[TrendPointOut]:
    """重要度ウェイト付きのトレンド線。x は発表日のエポック秒。"""

    points = [
        Point(x=_to_epoch(ev.date), y=ev.value, w=ev.weight)
        for ev in events_for_criterion(policies, criterion)
    ]
    return [TrendPointOut(date=_from_epoch(sp.x), score=sp.y) for sp in weighted_loess(points, bandwidth)]


def date_trend(policies: list[Policy], criterion: str, span: float = 0.25) -> list[TrendPointOut]:
    """ウェイトを使わない日付トレンド。全点 w=1 で同じ平滑化器を使う。"""

    events = events_for_criterion(policies, criterion)
    if len(events) < MIN_POINTS_FOR_DATE_TREND:
        if not (0 < span <= 1):
            raise ValueError(f"span must be in (0, 1], got {span!r}")
        return [
            TrendPointOut(date=ev.date, score=ev.value)
            for ev in sorted(events, key=lambda e: e.date)
        ]

    points = [Point(x=_to_epoch(ev.date), y=ev.value, w=1.0) for ev in events]
    return [TrendPointOut(date=_from_epoch(sp.x), score=sp.y) for sp in weighted_loess(points, span)]


def build_party_trends(party: Party, criterion: str, *, bandwidth: float = 0.25, span: float = 0.25) -> PartyTrends:
    return PartyTrends(
        party_name=party.party_name,
        color=party.color,
        cumulative=cumulative_series(party.policies, criterion),
        weighted_trend=weighted_trend(party.policies, criterion, bandwidth),
        date_trend=date_trend(party.policies, criterion, span),
    )


def build_topic_trends(
    topic_id: str,
    criterion: str | None = None,
    *,
    bandwidth: float = 0.25,
    span: float = 0.25,
    party_name: str | None = None,
    data_dir: Path | None = None,
) -> TopicTrendsResponse:
    """トピック内の各政党について累積平均・加重トレンド・日付トレンドをまとめる。

    criterion 未指定ならトピックの先頭クライテリアを使う。
    """

    config = get_topic_config(topic_id)
    criterion_key = resolve_criteria(config, [criterion] if criterion else None)[0]

    parties = policy_store.load_parties(config.topic_id, data_dir)
    if party_name:
        wanted = party_name.strip().lower()
        parties = [p for p in parties if p.party_name.strip().lower() == wanted]

    return TopicTrendsResponse(
        topic=topic_schema(config),
        criterion=criterion_key,
        bandwidth=bandwidth,
        span=span,
        parties=[build_party_trends(p, criterion_key, bandwidth=bandwidth, span=span) for p in parties],
    )
