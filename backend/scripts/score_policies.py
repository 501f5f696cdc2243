"""
トピックの政策JSONに不足しているスコアをLLMで付与する。

実行例:
    python backend/scripts/score_policies.py --topic migration
    python backend/scripts/score_policies.py --topic housing --criteria renters_rights --rescore
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root (backend/) is on sys.path so that `policytracker` can be imported when running as a script
sys.path.append(str(Path(__file__).resolve().parents[1]))

from policytracker.services import scoring_runs
from policytracker.services.topic_config import TOPIC_CONFIGS
from policytracker.settings import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Score policies for a topic with an LLM.")
    parser.add_argument("--topic", required=True, help=f"Topic id ({', '.join(sorted(TOPIC_CONFIGS))})")
    parser.add_argument("--criteria", default=None, help="Comma separated criteria (default: all for the topic)")
    parser.add_argument("--rescore", action="store_true", help="Score again even if a score exists")
    parser.add_argument("--provider", default=settings.agent_score_provider, help="auto|gemini|openai")
    parser.add_argument("--data-dir", default=None, help=f"Directory with topic JSON files (default: {settings.data_dir})")
    parser.add_argument("--debug", action="store_true", help="Print per-policy progress and save run details")
    args = parser.parse_args()

    criteria = args.criteria.split(",") if args.criteria else None
    try:
        result = scoring_runs.run_topic_scoring(
            topic_id=args.topic,
            criteria=criteria,
            rescore=args.rescore,
            provider=args.provider,
            data_dir=Path(args.data_dir) if args.data_dir else None,
            debug=args.debug or settings.agent_debug,
        )
    except (ValueError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Scoring {result.topic_id} policies")
    print(f"Criteria: {', '.join(result.criteria)}")
    if result.pending == 0:
        print("No policies need scoring. Use --rescore to force update.")
        return
    for err in result.errors:
        print(f"  -> Failed: {err}", file=sys.stderr)
    print(f"Scored {result.scored}/{result.pending} policies ({result.failed} failed)")
    if result.path:
        print(f"Updated: {result.path}")


if __name__ == "__main__":
    main()
