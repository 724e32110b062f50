"""Command-line interface for table layout.

WHY: Lets a pagination or rendering step in another tool get row heights
and wrapped lines for a table without embedding Python: it writes a JSON
request and reads back a JSON report.

HOW: Uses argparse to accept a request file ("-" for stdin), an optional
output path, and the JSON indent. The request is validated with the
pydantic LayoutRequest model, laid out with report.layout(), and the
schema-validated report is written to stdout or the output file. Status
messages go to stderr.

RULES:
- Positional argument: request JSON path, or "-" for stdin
- Report goes to stdout unless -o/--output is given
- Invalid JSON, invalid requests, and oversized cells exit with code 1
  and a message on stderr
- Logging level comes from TABLE_LAYOUT_LOG_LEVEL (config.LOG_LEVEL)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from table_layout.config import LOG_LEVEL
from table_layout.errors import CellWidthError
from table_layout.models import LayoutRequest
from table_layout.report import layout

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the report can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _read_request(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="table_layout",
        description="Wrap cell text and size table rows from a JSON request.",
    )
    parser.add_argument("request", help="Request JSON file, or - for stdin")
    parser.add_argument("-o", "--output", help="Write the report here instead of stdout")
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent for the report (default: 2)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    try:
        raw = _read_request(args.request)
    except (OSError, UnicodeDecodeError) as exc:
        _status("Error: cannot read {}: {}".format(args.request, exc))
        return 1

    try:
        request = LayoutRequest.model_validate(json.loads(raw))
    except json.JSONDecodeError as exc:
        _status("Error: request is not valid JSON: {}".format(exc))
        return 1
    except ValidationError as exc:
        _status("Error: invalid layout request:\n{}".format(exc))
        return 1

    try:
        report = layout(request)
    except CellWidthError as exc:
        _status("Error: {}".format(exc))
        return 1

    logger.info("Laid out %d rows, total height %.2f", len(report["rows"]), report["height"])
    text = json.dumps(report, indent=args.indent)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        _status("Report saved: {}".format(args.output))
    else:
        print(text)
    return 0
