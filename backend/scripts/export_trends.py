from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure project root (backend/) is on sys.path so that `policytracker` can be imported when running as a script
sys.path.append(str(Path(__file__).resolve().parents[1]))

from policytracker.services import trends
from policytracker.settings import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Export trend series JSON for static hosting.")
    parser.add_argument("--topic", required=True)
    parser.add_argument("--criterion", default=None, help="Criterion key (default: first criterion of the topic)")
    parser.add_argument("--bandwidth", type=float, default=settings.default_bandwidth)
    parser.add_argument("--span", type=float, default=settings.default_span)
    parser.add_argument(
        "--out",
        default=None,
        help="Output path (default: <data_dir>/trends/<topic>-<criterion>.json)",
    )
    args = parser.parse_args()

    try:
        payload = trends.build_topic_trends(
            args.topic,
            args.criterion,
            bandwidth=args.bandwidth,
            span=args.span,
        )
    except (ValueError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    out_path = Path(args.out) if args.out else settings.data_dir / "trends" / f"{payload.topic.topic_id}-{payload.criterion}.json"
    out_path = out_path.resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(payload.model_dump(mode="json"), ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote trends: {out_path}")


if __name__ == "__main__":
    main()
