#!/usr/bin/env python3
"""
Release Stats - Pipeline Runner

Runs the aggregation pipeline once and writes the result to stdout:
1. Load releases (configured source, or --source file)
2. Aggregate by organization
3. Resolve most active months
4. Sort and render as JSON or CSV

Usage:
    python run_pipeline.py --sort release_count --order desc --format csv
"""

import argparse
import logging
import sys
from typing import List, Optional

from release_stats.aggregation import OrgSummary
from release_stats.config import load_config
from release_stats.errors import ReleaseStatsError
from release_stats.ingestion import FileReleaseSource, build_source
from release_stats.pipeline import run_pipeline
from release_stats.presentation import to_csv, to_json

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate code.json releases by organization.")
    parser.add_argument("--sort", default=None,
                        help="release_count, total_labor_hours, or organization (default)")
    parser.add_argument("--order", default=None, help="desc for descending, otherwise ascending")
    parser.add_argument("--format", choices=("json", "csv"), default="json", dest="output_format")
    parser.add_argument("--source", default=None,
                        help="code.json file to read instead of the configured source")
    return parser.parse_args(argv)


def print_summary(summaries: List[OrgSummary]) -> None:
    """Log a short overview of the aggregated organizations."""
    total_releases = sum(summary.release_count for summary in summaries)
    in_production = sum(1 for summary in summaries if summary.all_in_production)

    logger.info(f"Organizations: {len(summaries)}")
    logger.info(f"  Releases: {total_releases}")
    logger.info(f"  All in production: {in_production}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the pipeline once."""
    args = parse_args(argv)

    try:
        config = load_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    # Logs go to stderr so stdout carries only the rendered data
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    if args.source:
        source = FileReleaseSource(args.source, strict=config.strict)
    else:
        source = build_source(config)

    try:
        summaries = run_pipeline(source, args.sort, args.order)
    except ReleaseStatsError as e:
        logger.error(f"Pipeline failed ({e.kind}): {e.message}")
        return 1

    print_summary(summaries)

    output = to_csv(summaries) if args.output_format == "csv" else to_json(summaries) + "\n"
    sys.stdout.write(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
