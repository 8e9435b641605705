# main.py
"""
CLI entrypoint for the scanner.

- Supports two modes:
  * dummy: replay a recorded capture from a JSON file (offline testing)
  * live: scan the HackerOne GraphQL endpoint
- Produces JSON, CSV, HTML and URI-list reports and prints a colorful summary table.
"""

import argparse
import logging
import os

from bounty_targets.graphql_client import GraphQLClient, ReplayClient
from bounty_targets.hackerone import HackerOneScanner
from utils import load_json_file, save_report, print_summary_and_report_path
from config import DEFAULT_GRAPHQL_ENDPOINT, DEFAULT_REPORT_DIR, ENDPOINT_ENV_VAR

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("bounty_targets")


def _scan_and_report(scanner: HackerOneScanner, mode: str, extra: dict,
                     report_dir: str, print_table: bool):
    programs = scanner.scan()
    uris = scanner.uris()
    report_paths = save_report(programs, uris, mode=mode, extra=extra, out_dir=report_dir)
    print_summary_and_report_path(programs, report_paths, print_full_table=print_table)
    return report_paths


def run_dummy(file_path: str, report_dir: str = DEFAULT_REPORT_DIR, print_table: bool = False):
    """
    Run the scanner in dummy mode using a recorded capture file.
    No network access is required in this mode.
    """
    logger.info("Running in dummy mode using file: %s", file_path)
    scanner = HackerOneScanner(client=ReplayClient(load_json_file(file_path)))
    return _scan_and_report(scanner, "dummy", {"source_file": file_path}, report_dir, print_table)


def run_live(endpoint: str = None, report_dir: str = DEFAULT_REPORT_DIR, print_table: bool = False):
    """
    Run the scanner against the live GraphQL endpoint.
    """
    # Resolve endpoint: CLI -> env -> config default
    endpoint = endpoint or os.environ.get(ENDPOINT_ENV_VAR) or DEFAULT_GRAPHQL_ENDPOINT

    logger.info("Running in live mode (endpoint=%s)", endpoint)
    scanner = HackerOneScanner(client=GraphQLClient(endpoint=endpoint))
    return _scan_and_report(scanner, "live", {"endpoint": endpoint}, report_dir, print_table)


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="HackerOne program scope scanner."
    )
    p.add_argument(
        "--mode",
        choices=["dummy", "live"],
        required=True,
        help="Run mode: dummy (recorded capture) or live (GraphQL endpoint)",
    )
    p.add_argument(
        "--file",
        help="Path to capture JSON file (required for dummy mode)",
    )
    p.add_argument(
        "--endpoint",
        help=f"GraphQL endpoint (optional, defaults to ${ENDPOINT_ENV_VAR} or {DEFAULT_GRAPHQL_ENDPOINT})",
    )
    p.add_argument(
        "--report-dir",
        default=DEFAULT_REPORT_DIR,
        help=f"Directory to save reports (default: {DEFAULT_REPORT_DIR})",
    )
    p.add_argument(
        "--print-table",
        action="store_true",
        help="Print full programs table to stdout",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.mode == "dummy":
        if not args.file:
            raise SystemExit("dummy mode requires --file path to JSON")
        run_dummy(
            args.file,
            report_dir=args.report_dir,
            print_table=args.print_table,
        )
    else:
        run_live(
            endpoint=args.endpoint,
            report_dir=args.report_dir,
            print_table=args.print_table,
        )


if __name__ == "__main__":
    main()
