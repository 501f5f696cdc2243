from __future__ import annotations

import json
import re
from typing import Any


def _strip_code_fences(text: str) -> str:
    """
    LLMが ```json ... ``` のようなコードフェンス付きで返すことがあるため除去する。
    """
    s = text.strip()
    if s.startswith("```"):
        s = re.sub(r"^```[a-zA-Z0-9_-]*\n", "", s)
        s = re.sub(r"\n```$", "", s.strip())
    return s.strip()


def parse_json(text: str) -> Any:
    """
    LLM出力からJSONをパースする。
    - 先頭/末尾のコードフェンスを除去
    - それでも失敗する場合は、最初の {/[ から最後の }/] までを抜き出して再試行
    """
    s = _strip_code_fences(text)
    try:
        return json.loads(s)
    except json.JSONDecodeError as exc:
        first_error = exc

    start_candidates = [i for i in (s.find("["), s.find("{")) if i != -1]
    end_candidates = [i for i in (s.rfind("]"), s.rfind("}")) if i != -1]
    if not start_candidates or not end_candidates:
        raise first_error
    start = min(start_candidates)
    end = max(end_candidates) + 1
    return json.loads(s[start:end])
