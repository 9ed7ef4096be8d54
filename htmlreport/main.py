"""Entry point for the HTML report generator.

Reads a results document, groups and summarizes it, and writes a static
HTML report with per-run charts into the output directory.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from htmlreport.config import ReportConfig
from htmlreport.model.loader import load_results
from htmlreport.reporting.assembler import ReportAssembler, ReportGenerationError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a static HTML report from test results"
    )
    parser.add_argument(
        "--results",
        required=True,
        type=Path,
        help="Path to the YAML or JSON results document",
    )
    parser.add_argument(
        "--output-dir",
        required=True,
        type=Path,
        help="Directory in which to create the report",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to a YAML or JSON report configuration file",
    )
    parser.add_argument(
        "--no-frames",
        dest="frames",
        action="store_false",
        default=None,
        help="Write the overview as index.html instead of a frameset",
    )
    parser.add_argument(
        "--stylesheet",
        type=Path,
        default=None,
        help="Custom CSS file to include in the report",
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Report title",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = ReportConfig(
        args.config_file,
        frames=args.frames,
        stylesheet=str(args.stylesheet) if args.stylesheet else None,
        title=args.title,
    )

    try:
        result_set = load_results(args.results)
    except FileNotFoundError:
        print(f"Error: Results file not found: {args.results}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid results document: {e}", file=sys.stderr)
        return 1

    assembler = ReportAssembler(config)
    try:
        report_dir = assembler.generate(result_set, args.output_dir)
    except ReportGenerationError as e:
        print(f"Error: {e} ({e.__cause__})", file=sys.stderr)
        return 1

    print(f"HTML report written to: {report_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
