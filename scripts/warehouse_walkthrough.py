#!/usr/bin/env python3
"""Command line entry point for the warehouse administration walkthrough.

Usage:
    # Run the full walkthrough against Snowflake (needs SNOWFLAKE_* in .env)
    poetry run python scripts/warehouse_walkthrough.py run

    # Keep the warehouse and resource monitor, export query results to CSV
    poetry run python scripts/warehouse_walkthrough.py run --skip-teardown --export-dir ./data/exports

    # Write the walkthrough as a SQL script without connecting
    poetry run python scripts/warehouse_walkthrough.py render --output walkthrough.sql

    # Drop the walkthrough objects and restore account defaults
    poetry run python scripts/warehouse_walkthrough.py teardown
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from data_utils.logger import init_logger
from prefect_jobs.warehouse_admin.utils import build_walkthrough_script, render_script

logger = init_logger('warehouse_walkthrough')


def run(args):
    from prefect_jobs.warehouse_admin.main import warehouse_admin_flow

    summary = warehouse_admin_flow(skip_teardown=args.skip_teardown, export_dir=args.export_dir)
    logger.info(f"walkthrough finished with status: {summary['status']}")
    for query in summary['queries']:
        logger.info(f"  {query['label']}: {query['number_of_rows']} rows in {query['query_time_taken']:.2f}s")
    return 0


def render(args):
    script = render_script(build_walkthrough_script())
    if args.output:
        Path(args.output).write_text(script)
        logger.info(f'wrote walkthrough script to {args.output}')
    else:
        print(script)
    return 0


def teardown(args):
    from prefect_jobs.warehouse_admin.main import warehouse_teardown_flow

    completed = warehouse_teardown_flow()
    logger.info(f"teardown completed: {', '.join(completed)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Snowflake warehouse administration walkthrough")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the walkthrough against Snowflake")
    run_parser.add_argument("--skip-teardown", action="store_true",
                            help="Leave the warehouse, resource monitor and account timeouts in place")
    run_parser.add_argument("--export-dir", type=str, help="Export sample query results as CSV files to this directory")
    run_parser.set_defaults(func=run)

    render_parser = subparsers.add_parser("render", help="Print the walkthrough SQL script without connecting")
    render_parser.add_argument("--output", type=str, help="Write the script to this file instead of stdout")
    render_parser.set_defaults(func=render)

    teardown_parser = subparsers.add_parser("teardown", help="Drop the walkthrough objects and restore defaults")
    teardown_parser.set_defaults(func=teardown)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
