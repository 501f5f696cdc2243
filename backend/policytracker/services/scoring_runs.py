from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable

from ..agents.base import LLMClient, PendingPolicy
from ..agents.debug import dprint, save_json
from ..agents.llm_clients import GeminiLLMClient, OpenAILLMClient
from ..agents.scorer import ScoringAgent
from ..schemas import CriterionScore, Party
from ..settings import settings
from . import policy_store
from .topic_config import get_topic_config, resolve_criteria


@dataclass
class ScoringRunResult:
    topic_id: str
    criteria: list[str]
    pending: int = 0
    scored: int = 0
    failed: int = 0
    path: Path | None = None
    errors: list[str] = field(default_factory=list)


def pick_score_client(*, provider: str, openai_model: str | None = None, gemini_model: str | None = None):
    p = (provider or "auto").lower()
    if p in {"auto", "gemini"} and settings.gemini_api_key:
        return "gemini", GeminiLLMClient(api_key=settings.gemini_api_key, model=gemini_model or settings.gemini_score_model)
    if p in {"auto", "openai"} and settings.openai_api_key:
        return "openai", OpenAILLMClient(api_key=settings.openai_api_key, model=openai_model or settings.openai_score_model)
    raise ValueError("No available LLM provider for scoring (set GEMINI_API_KEY or OPENAI_API_KEY)")


def collect_pending(parties: list[Party], criteria: Iterable[str], *, rescore: bool = False) -> list[PendingPolicy]:
    """未スコアのクライテリアを持つ政策を集める。rescore なら全件。"""

    wanted = list(criteria)
    pending: list[PendingPolicy] = []
    for party_idx, party in enumerate(parties):
        for idx, policy in enumerate(party.policies):
            missing = [c for c in wanted if rescore or c not in policy.scores]
            if not missing:
                continue
            pending.append(
                PendingPolicy(
                    party_index=party_idx,
                    party_name=party.party_name,
                    policy_index=idx,
                    policy_text=policy.policy_text,
                    context=policy.source.notes if policy.source else None,
                    criteria=missing,
                )
            )
    return pending


def run_topic_scoring(
    *,
    topic_id: str,
    criteria: Iterable[str] | None = None,
    rescore: bool = False,
    provider: str | None = None,
    client: LLMClient | None = None,
    data_dir: Path | None = None,
    request_interval_sec: float | None = None,
    debug: bool | None = None,
) -> ScoringRunResult:
    """トピックのJSONを読み、不足しているスコアをLLMで埋めて書き戻す。

    1件ずつ要求し、失敗した政策は記録して次へ進む（再試行はしない）。
    """

    config = get_topic_config(topic_id)
    criteria_keys = resolve_criteria(config, criteria)
    debug = settings.agent_debug if debug is None else debug
    interval = settings.request_interval_sec if request_interval_sec is None else request_interval_sec

    parties = policy_store.load_parties(config.topic_id, data_dir)
    pending = collect_pending(parties, criteria_keys, rescore=rescore)
    result = ScoringRunResult(topic_id=config.topic_id, criteria=criteria_keys, pending=len(pending))
    if not pending:
        return result

    if client is None:
        used_provider, client = pick_score_client(provider=provider or settings.agent_score_provider)
        dprint(debug, "score_client=", used_provider)
    agent = ScoringAgent(client)

    for n, item in enumerate(pending, start=1):
        if interval and n > 1:
            time.sleep(interval)
        dprint(debug, f"[{n}/{len(pending)}]", item.party_name, item.policy_text[:60])
        try:
            scores = agent.score(topic=config.topic_id, pending=item)
        except Exception as exc:
            # 1件の失敗で全体を止めない
            result.failed += 1
            result.errors.append(f"{item.party_name}: {item.policy_text[:30]}... {exc}")
            continue

        if not scores:
            result.failed += 1
            result.errors.append(f"{item.party_name}: {item.policy_text[:30]}... empty response")
            continue

        policy = parties[item.party_index].policies[item.policy_index]
        for key, res in scores.items():
            policy.scores[key] = CriterionScore(score=res.score, weight=res.weight, reasoning=res.reasoning)
        result.scored += 1

    result.path = policy_store.save_parties(config.topic_id, parties, data_dir)

    if debug:
        run_path = Path(data_dir or settings.data_dir) / "runs" / f"{config.topic_id}_{datetime.now():%Y%m%d_%H%M%S}.json"
        save_json(debug, run_path, {"result": {**asdict(result), "path": str(result.path)}, "pending": [asdict(p) for p in pending]})
    return result
