#!/usr/bin/env python3
"""
CLI for running environmental risk searches and exporting reports.

Usage:
    python -m reporting.cli search "<fastighetsbeteckning>"
    python -m reporting.cli verify <report_json>

Examples:
    # Search with the configured data source and save the report
    python -m reporting.cli search "Stockholm 1:1"

    # Reproducible mock search
    python -m reporting.cli search "Göteborg 123:45" --seed 42 --output reports/

    # Check that a saved report is internally consistent
    python -m reporting.cli verify reports/miljorapport-Stockholm-1-1.json
"""

import argparse
import logging
import sys
from pathlib import Path

from core.exceptions import RiskAssessmentMismatch, SearchError
from core.models import SearchResult
from core.search import search_property
from sources import MockEnvironmentalSource, create_source
from utils.config import Config
from utils.formatting import format_area, format_distance, format_risk_level

from .export import ReportFormatError, load_report, write_report


def print_summary(result: SearchResult) -> None:
    """Print a plain-text summary of a search result."""
    prop = result.property
    env = result.environmental

    print(f"Property: {prop.fastighetsbeteckning}")
    print(f"  Municipality: {prop.municipality} ({prop.county})")
    print(f"  Area: {format_area(prop.area)}")
    print(f"  Land use: {prop.land_use}")
    print()
    print(f"Overall risk: {format_risk_level(env.risk_assessment.overall)}")
    for factor in env.risk_assessment.factors:
        print(f"  - {factor}")
    print()
    print(f"Soil pollution: {format_risk_level(env.soil_pollution.level)}")
    if env.soil_pollution.contaminants:
        print(f"  Contaminants: {', '.join(env.soil_pollution.contaminants)}")

    for business in env.nearby_businesses:
        print(
            f"Business: {business.name} ({business.type}), "
            f"{format_distance(business.distance)}, risk {business.risk_level.value}"
        )
    for site in env.contaminated_sites:
        print(
            f"Site: {site.name} [{site.status.value}], "
            f"{format_distance(site.distance)}, severity {site.severity.value}"
        )


def cmd_search(args):
    """Run one search and write the exported report."""
    config = Config.load()

    if args.seed is not None:
        source = MockEnvironmentalSource(seed=args.seed)
    else:
        source = create_source(config)

    try:
        result = search_property(args.fastighetsbeteckning, source=source)
    except SearchError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1

    print_summary(result)

    output_dir = Path(args.output or config.reports_dir)
    path = write_report(result, output_dir)

    print()
    print(f"Report written: {path}")
    return 0


def cmd_verify(args):
    """Check that a saved report's risk assessment matches its data."""
    input_path = Path(args.report_file)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        result, generated_at = load_report(input_path.read_text(encoding="utf-8"))
    except RiskAssessmentMismatch as e:
        print(f"Error: Inconsistent report: {e}", file=sys.stderr)
        return 1
    except ReportFormatError as e:
        print(f"Error: Invalid report: {e}", file=sys.stderr)
        return 1

    print(f"Report OK: {result.property.fastighetsbeteckning}")
    if generated_at:
        print(f"  Generated: {generated_at.isoformat()}")
    print(f"  Overall risk: {format_risk_level(result.environmental.risk_assessment.overall)}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Miljödataportalen - Environmental Risk Reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli search "Stockholm 1:1"
    python -m reporting.cli verify reports/miljorapport-Stockholm-1-1.json

Output:
    Reports are saved to: $REPORTS_DIR/miljorapport-<designation>.json
        """,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search a property and export its environmental report",
    )
    search_parser.add_argument(
        "fastighetsbeteckning",
        help='Property designation, e.g. "Stockholm 1:1"',
    )
    search_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Use the mock source with this random seed",
    )
    search_parser.add_argument(
        "--output",
        default=None,
        help="Output directory (default: $REPORTS_DIR)",
    )
    search_parser.set_defaults(func=cmd_search)

    # Verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a saved report",
    )
    verify_parser.add_argument(
        "report_file",
        help="Path to JSON report file",
    )
    verify_parser.set_defaults(func=cmd_verify)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or Config.load().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
