"""
cli.py - Command-line entry point for syncing vehicle makes and models to Google Sheets.

This script:
1. Loads makes and models from a YAML file
2. Lays them out as rows (header, then one row per model grouped under its make)
3. Authorizes with Google via OAuth2 and writes the rows one update call at a time

Usage:
    vehicle-sheets-sync --data vehicles.yaml --sheet-name Sheet2
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

from dotenv import load_dotenv

from .config import SHEETS_SYNC_CONFIG
from .errors import SheetsSyncError
from .vehicle_data import load_vehicle_file, assemble_makes
from .row_layout import build_rows
from .auth import load_credentials
from .google_sheets_client import GoogleSheetsClient
from .dispatcher import SinkConfig, FixedWindowPacing, UpdateDispatcher, verify_rows

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Write vehicle makes and models from a YAML file into a Google Sheet.',
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        '--data',
        type=str,
        default=SHEETS_SYNC_CONFIG["data_file"],
        help=f'YAML file with the makes and models. Defaults to "{SHEETS_SYNC_CONFIG["data_file"]}".'
    )
    parser.add_argument(
        '--credentials',
        type=str,
        default=SHEETS_SYNC_CONFIG["credentials_file"],
        help=f'OAuth client secrets file. Defaults to "{SHEETS_SYNC_CONFIG["credentials_file"]}".'
    )
    parser.add_argument(
        '--token',
        type=str,
        default=SHEETS_SYNC_CONFIG["token_file"],
        help=f'Cached OAuth token file. Defaults to "{SHEETS_SYNC_CONFIG["token_file"]}".'
    )
    parser.add_argument(
        '--spreadsheet-id',
        type=str,
        default=None,
        help='Target spreadsheet ID. Defaults to $SHEETS_SPREADSHEET_ID, then the configured ID.'
    )
    parser.add_argument(
        '--sheet-name',
        type=str,
        default=SHEETS_SYNC_CONFIG["sheet_name"],
        help=f'Worksheet to write to. Defaults to "{SHEETS_SYNC_CONFIG["sheet_name"]}".'
    )
    parser.add_argument(
        '--separate-makes',
        action='store_true',
        help='Leave a blank row after each make.'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Log the rows instead of writing them. No Google authorization is needed.'
    )
    parser.add_argument(
        '--verify',
        action='store_true',
        help='Read the written rows back and report any that differ.'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Logging verbosity (default: INFO).'
    )
    return parser


def run(args: argparse.Namespace) -> int:
    """Runs one sync. Returns the process exit code."""
    spreadsheet_id = (args.spreadsheet_id
                      or os.getenv("SHEETS_SPREADSHEET_ID")
                      or SHEETS_SYNC_CONFIG["spreadsheet_id"])
    try:
        makes, model_groups = load_vehicle_file(args.data)
        makes = assemble_makes(makes, model_groups)
        rows = build_rows(makes, args.sheet_name, separate_makes=args.separate_makes)

        client = None
        if not args.dry_run:
            credentials = load_credentials(args.credentials, args.token)
            client = GoogleSheetsClient(credentials=credentials)

        sink = SinkConfig(client=client, spreadsheet_id=spreadsheet_id)
        pacing = FixedWindowPacing(SHEETS_SYNC_CONFIG["pace_every"], SHEETS_SYNC_CONFIG["pace_delay_seconds"])
        result = UpdateDispatcher(sink, pacing=pacing, dry_run=args.dry_run).dispatch(rows)
        if not result.ok:
            raise result.error

        if args.verify and not args.dry_run:
            mismatched = verify_rows(sink, rows)
            if mismatched:
                logger.error(f"Verification failed for rows {mismatched} in sheet '{args.sheet_name}'.")
                return 1
    except SheetsSyncError as e:
        logger.error(str(e))
        return 1

    logger.info("Process completed.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(levelname)s - %(message)s')
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
