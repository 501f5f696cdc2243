from fastapi import APIRouter, HTTPException, Query

from ..schemas import PartySummary, TopicPartiesResponse, TopicsResponse, TopicTrendsResponse
from ..services import policy_store, trends
from ..services.topic_config import get_topic_config, list_topic_configs
from ..settings import settings


router = APIRouter()


def _topic_or_404(topic_id: str):
    try:
        return get_topic_config(topic_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/topics", response_model=TopicsResponse)
def list_topics() -> TopicsResponse:
    return TopicsResponse(topics=[trends.topic_schema(c) for c in list_topic_configs()])


@router.get("/topics/{topic_id}/parties", response_model=TopicPartiesResponse)
def list_parties(topic_id: str) -> TopicPartiesResponse:
    config = _topic_or_404(topic_id)
    try:
        parties = policy_store.load_parties(config.topic_id)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail="topic data not found") from exc

    summaries = [
        PartySummary(
            party_name=p.party_name,
            color=p.color,
            policy_count=len(p.policies),
            scored_count=sum(1 for pol in p.policies if pol.scores),
        )
        for p in parties
    ]
    return TopicPartiesResponse(topic=trends.topic_schema(config), parties=summaries)


@router.get("/topics/{topic_id}/trends", response_model=TopicTrendsResponse)
def get_topic_trends(
    topic_id: str,
    criterion: str | None = Query(None, description="未指定ならトピックの先頭クライテリア"),
    bandwidth: float | None = Query(None, gt=0, le=1, description="加重LOESSのバンド幅"),
    span: float | None = Query(None, gt=0, le=1, description="日付トレンドのスパン"),
    party: str | None = Query(None, description="政党名で絞り込む"),
) -> TopicTrendsResponse:
    config = _topic_or_404(topic_id)
    try:
        return trends.build_topic_trends(
            config.topic_id,
            criterion,
            bandwidth=bandwidth if bandwidth is not None else settings.default_bandwidth,
            span=span if span is not None else settings.default_span,
            party_name=party,
        )
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail="topic data not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
