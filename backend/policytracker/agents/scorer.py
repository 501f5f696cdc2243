from __future__ import annotations

from typing import Dict, List

from .base import CriterionResult, LLMClient, PendingPolicy


class ScoringAgent:
    """1件の政策をLLMに渡し、クライテリアごとのスコアとウェイトを得るエージェント。"""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    def score(self, *, topic: str, pending: PendingPolicy) -> Dict[str, CriterionResult]:
        results = self.llm_client.score_policy(
            topic=topic,
            policy_text=pending.policy_text,
            context=pending.context,
            criteria=pending.criteria,
        )
        # 要求していないクライテリアは捨てる
        wanted: List[str] = pending.criteria
        return {k: v for k, v in results.items() if k in wanted}
