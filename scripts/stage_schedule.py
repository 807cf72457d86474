#!/usr/bin/env python3
"""Print the growth stage schedule and water bounds for a crop."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
from scripts import ensure_repo_root_on_path

ROOT = ensure_repo_root_on_path()

from irrigation_engine.growth_stage import (
    generate_stage_schedule,
    list_supported_crops,
    stage_schedule_df,
)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Show growth stages for a crop")
    parser.add_argument("crop", choices=list_supported_crops(), help="Crop identifier")
    parser.add_argument("--format", choices=("json", "csv"), default="json")
    parser.add_argument("--output", type=Path, help="Optional output file path")
    args = parser.parse_args(argv)

    if args.format == "csv":
        text = stage_schedule_df(args.crop).to_csv(index=False)
    else:
        text = json.dumps(generate_stage_schedule(args.crop), indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
    else:
        print(text)


if __name__ == "__main__":  # pragma: no cover
    main()
