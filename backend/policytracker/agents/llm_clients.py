from __future__ import annotations

import json
from typing import Any, Dict, List

import google.generativeai as genai
import httpx
from openai import OpenAI

from ..services.topic_config import criterion_prompt
from .base import CriterionResult, LLMClient
from .json_parse import parse_json
from .prompting import load_prompt


SYSTEM_PROMPT = load_prompt("score_policy.txt")


def build_prompt(topic: str, policy_text: str, context: str | None, criteria: List[str]) -> str:
    rubrics = "\n\n".join(
        f"### {c.replace('_', ' ').upper()}\n{criterion_prompt(c).strip()}" for c in criteria
    )
    policy = json.dumps({"text": policy_text, "context": context}, ensure_ascii=False, indent=2)
    return (
        f"{SYSTEM_PROMPT.replace('{topic}', topic)}\n"
        f"Policy:\n{policy}\n\n"
        f"Criteria:\n{rubrics}\n"
    )


def parse_scores(data: Any, criteria: List[str]) -> Dict[str, CriterionResult]:
    """LLM応答（{"scores": {...}} または配列の先頭要素）からクライテリア別の結果を取り出す。"""

    if isinstance(data, list):
        data = data[0] if data else {}
    if not isinstance(data, dict):
        return {}
    scores = data.get("scores", data)
    if not isinstance(scores, dict):
        return {}

    results: Dict[str, CriterionResult] = {}
    for key in criteria:
        item = scores.get(key)
        if not isinstance(item, dict):
            continue
        try:
            score = int(item.get("score"))
            weight = int(item.get("weight"))
        except (TypeError, ValueError):
            continue
        # 範囲外はモデルの誤りとして捨てる
        if not (1 <= score <= 10) or not (0 <= weight <= 3):
            continue
        results[key] = CriterionResult(score=score, weight=weight, reasoning=str(item.get("reasoning") or ""))
    return results


def build_response_schema(criteria: List[str]) -> Dict[str, Any]:
    """Geminiの response_schema。クライテリアごとに整数の score/weight と reasoning を必須にする。"""

    item = {
        "type": "OBJECT",
        "properties": {
            "score": {"type": "INTEGER", "description": "Score from 1 to 10"},
            "weight": {"type": "INTEGER", "description": "Weight from 1 to 3"},
            "reasoning": {"type": "STRING", "description": "Brief explanation"},
        },
        "required": ["score", "weight", "reasoning"],
    }
    return {
        "type": "OBJECT",
        "properties": {
            "scores": {
                "type": "OBJECT",
                "properties": {c: item for c in criteria},
                "required": list(criteria),
            },
        },
        "required": ["scores"],
    }


class OpenAILLMClient(LLMClient):
    """OpenAIベースのスコアリングクライアント（chat.completions）。"""

    def __init__(self, api_key: str, model: str = "gpt-5-mini"):
        # httpx は環境変数のプロキシ設定を自動参照する。接続に問題がある場合は環境変数を確認すること。
        http_client = httpx.Client(timeout=60, follow_redirects=True)
        self.client = OpenAI(api_key=api_key, http_client=http_client)
        self.model = model

    def score_policy(
        self,
        *,
        topic: str,
        policy_text: str,
        context: str | None,
        criteria: List[str],
    ) -> Dict[str, CriterionResult]:
        messages = [
            {"role": "system", "content": "You score UK political policies. Return JSON only."},
            {"role": "user", "content": build_prompt(topic, policy_text, context, criteria)},
        ]
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            response_format={"type": "json_object"},
        )
        text = response.choices[0].message.content or "{}"
        try:
            data = parse_json(text)
        except json.JSONDecodeError:
            # モデルの応答がJSONでない場合は空を返す
            return {}
        return parse_scores(data, criteria)


class GeminiLLMClient(LLMClient):
    """Google Geminiベースのスコアリングクライアント（JSONモードで応答させる）。"""

    def __init__(self, api_key: str, model: str = "models/gemini-2.0-flash"):
        genai.configure(api_key=api_key)
        self.model = model

    def score_policy(
        self,
        *,
        topic: str,
        policy_text: str,
        context: str | None,
        criteria: List[str],
    ) -> Dict[str, CriterionResult]:
        model = genai.GenerativeModel(
            self.model,
            generation_config={
                "response_mime_type": "application/json",
                "response_schema": build_response_schema(criteria),
            },
        )
        resp = model.generate_content(build_prompt(topic, policy_text, context, criteria))
        text = resp.text or "{}"
        try:
            data = parse_json(text)
        except json.JSONDecodeError:
            return {}
        return parse_scores(data, criteria)
