"""Command-line interface for SheetTrace."""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from .config import settings


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="SheetTrace - find the formula dependents of spreadsheet cells"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Trace command
    trace_parser = subparsers.add_parser(
        "trace", help="List the cells whose formulas reference a cell"
    )
    trace_parser.add_argument("cell", help="Target cell in A1 notation, e.g. B7")
    source = trace_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--grid-file", type=Path, help="JSON file holding a list of rows of formula text"
    )
    source.add_argument("--spreadsheet", "-s", help="Spreadsheet ID to read")
    trace_parser.add_argument(
        "--sheet", default="Sheet1", help="Sheet to trace within (default: Sheet1)"
    )
    trace_parser.add_argument(
        "--no-annotate", action="store_true", help="Do not write the result as a cell note"
    )
    trace_parser.add_argument(
        "--ignore-case", action="store_true", help="Match references case-insensitively"
    )

    # Auth command
    subparsers.add_parser("auth", help="Authenticate with Google Sheets API")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "trace":
        run_trace(args)
    elif args.command == "auth":
        run_auth()
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "sheettrace.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def run_trace(args: argparse.Namespace):
    """Trace dependents from a grid file or a live sheet and print the result."""
    from .ops import DependentTraceEngine
    from .trace import find_dependents

    case_sensitive = False if args.ignore_case else settings.reference_case_sensitive

    try:
        if args.grid_file:
            grid = json.loads(args.grid_file.read_text())
            result = find_dependents(grid, args.cell, case_sensitive=case_sensitive)
            print(result.format_note())
            return

        engine = DependentTraceEngine(case_sensitive=case_sensitive)
        report = engine.trace_sheet(
            args.spreadsheet,
            args.sheet,
            args.cell,
            annotate=False if args.no_annotate else None,
        )
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(report.note)
    if report.annotated:
        print(f"Note written to {report.sheet_name}!{report.target}")
    for error in report.errors:
        print(f"Warning: note not written: {error}")


def run_auth():
    """Run the Google authentication flow."""
    from .sheets import GoogleSheetsClient

    print("Authenticating with Google Sheets API...")
    try:
        client = GoogleSheetsClient()
        # Accessing the service property triggers auth
        _ = client.service
        print("Authentication successful!")
        print("Token saved. You can now use SheetTrace with Google Sheets.")
    except Exception as e:
        print(f"Authentication failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
