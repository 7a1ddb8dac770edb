#!/usr/bin/env python3
"""
Score a batch of events against a profile.

Reads a profile document and a JSON list of events (or an object with
an "events" key), runs the relevance engine and prints the ranked
results as JSON.

Usage:
    python scripts/score_events.py --profile profile.json --events events.json
    python scripts/score_events.py --profile p.json --events e.json --threshold 0.5 --analytics
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from georisk.config import ScoringConfig, settings
from georisk.relevance import RelevanceEngine, get_scoring_analytics, load_tables

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main():
    parser = argparse.ArgumentParser(description="Score events against a risk profile")
    parser.add_argument("--profile", type=Path, required=True, help="Profile JSON file")
    parser.add_argument("--events", type=Path, required=True, help="Events JSON file")
    parser.add_argument("--tables", type=Path, help="Intelligence tables JSON file")
    parser.add_argument("--threshold", type=float, default=None,
                        help="Caller threshold on top of the engine minimum")
    parser.add_argument("--analytics", action="store_true", help="Include batch analytics")
    parser.add_argument("--word-boundary", action="store_true",
                        help="Match keywords on word boundaries only")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size")
    parser.add_argument("--output", type=Path, help="Write results here instead of stdout")
    args = parser.parse_args()

    config = settings.scoring
    if args.word_boundary:
        config = ScoringConfig(**{**config.model_dump(), "matching_mode": "word_boundary"})

    tables = load_tables(args.tables) if args.tables else None
    engine = RelevanceEngine(config=config, tables=tables)

    profile = load_json(args.profile)
    events = load_json(args.events)
    if isinstance(events, dict):
        events = events.get("events", [])

    scored = engine.score_events(profile, events, max_workers=args.workers)
    if args.threshold is not None:
        scored = [s for s in scored if s.relevance_score >= args.threshold]

    result = {
        "success": True,
        "events": [s.to_dict() for s in scored],
        "total": len(scored),
    }
    if args.analytics:
        result["analytics"] = get_scoring_analytics(scored, config.thresholds).to_dict()

    output = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info(f"Wrote {len(scored)} scored events to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
