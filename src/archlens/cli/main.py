from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..core import RISK_LEVELS, calculate_all_risks, count_by_level
from ..core.risk import risk_rank
from ..io import dump_result_file, load_dataset

TIERS = ("integrations", "applications", "actions", "stages")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archlens-risk",
        description="Compute integration, application, action and stage risk levels for an architecture model.",
    )
    parser.add_argument("input", help="Fixture directory or bundled JSON file describing the architecture model")
    parser.add_argument(
        "--out",
        default="examples/output/risks.json",
        help="Output JSON file path (default: examples/output/risks.json)",
    )
    parser.add_argument(
        "--tier",
        choices=("all", *TIERS),
        default="all",
        help="Only report one tier (default: all)",
    )
    parser.add_argument(
        "--min-level",
        choices=RISK_LEVELS,
        default="none",
        help="Drop entries below this risk level from the written maps (default: none)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    input_path = Path(args.input).resolve()
    output_path = Path(args.out).resolve()

    if not input_path.exists():
        print(f"error: input not found: {input_path}", file=sys.stderr)
        return 2

    try:
        dataset = load_dataset(input_path)
    except Exception as exc:
        print(f"error: invalid input: {exc}", file=sys.stderr)
        return 2

    report = calculate_all_risks(dataset.integrations, dataset.applications, dataset.actions, dataset.stages)
    tiers = report.tiers()
    selected = TIERS if args.tier == "all" else (args.tier,)
    threshold = risk_rank(args.min_level)

    risks = {
        tier: {item_id: level for item_id, level in tiers[tier].items() if risk_rank(level) >= threshold}
        for tier in selected
    }
    summary = {tier: count_by_level(tiers[tier]) for tier in selected}
    payload = {"risks": risks, "summary": summary}

    output_path.parent.mkdir(parents=True, exist_ok=True)
    dump_result_file(output_path, payload)

    for tier in selected:
        counts = " ".join(f"{level}={count}" for level, count in summary[tier].items())
        print(f"{tier}: {counts}")
    print(f"wrote={output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
