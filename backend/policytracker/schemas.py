from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CriterionScore(BaseModel):
    score: int = Field(..., ge=1, le=10)
    weight: int = Field(..., ge=0, le=3)
    reasoning: str = ""


class PolicySource(BaseModel):
    url: Optional[str] = None
    notes: Optional[str] = None


class Policy(BaseModel):
    date_announced: date
    policy_text: str
    scores: Dict[str, CriterionScore] = Field(default_factory=dict)
    source: Optional[PolicySource] = None
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date_announced": "2024-07-17",
                "policy_text": "Scrap the Rwanda deportation scheme",
                "scores": {
                    "human_rights": {"score": 9, "weight": 3, "reasoning": "Removes refoulement risk"},
                },
                "source": {"url": "https://www.gov.uk/...", "notes": "King's Speech"},
            }
        }
    )


class Party(BaseModel):
    party_name: str
    color: str = "#888888"
    policies: List[Policy] = Field(default_factory=list)


class Criterion(BaseModel):
    key: str
    label: str


class Topic(BaseModel):
    topic_id: str
    label: str
    criteria: List[Criterion]


class TopicsResponse(BaseModel):
    topics: List[Topic]


class PartySummary(BaseModel):
    party_name: str
    color: str
    policy_count: int
    scored_count: int


class TopicPartiesResponse(BaseModel):
    topic: Topic
    parties: List[PartySummary]


class AveragePointOut(BaseModel):
    date: date
    score: float


class TrendPointOut(BaseModel):
    date: date
    score: float


class PartyTrends(BaseModel):
    party_name: str
    color: str
    cumulative: List[AveragePointOut]
    weighted_trend: List[TrendPointOut]
    date_trend: List[TrendPointOut]


class TopicTrendsResponse(BaseModel):
    topic: Topic
    criterion: str
    bandwidth: float
    span: float
    parties: List[PartyTrends]
