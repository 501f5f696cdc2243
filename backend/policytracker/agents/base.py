from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol


class LLMClient(Protocol):
    """政策スコア生成用のLLMクライアント抽象。"""

    def score_policy(
        self,
        *,
        topic: str,
        policy_text: str,
        context: str | None,
        criteria: List[str],
    ) -> Dict[str, "CriterionResult"]:
        ...


@dataclass
class CriterionResult:
    score: int
    weight: int
    reasoning: str


@dataclass
class PendingPolicy:
    party_index: int
    party_name: str
    policy_index: int
    policy_text: str
    context: str | None
    criteria: List[str]
