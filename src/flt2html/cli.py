"""Command-line interface for flt2html.

Usage::

    flt2html input.json                          # writes input.html
    flt2html input.json -o output.html           # explicit output path
    flt2html input.json --body-only              # body fragment only
    flt2html input.json --stylesheet site.css    # link an extra stylesheet
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from flt2html import __version__
from flt2html.converter import Converter
from flt2html.exceptions import Flt2HtmlError
from flt2html.logging_utils import configure_logging
from flt2html.options import RenderOptions

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flt2html",
        description="Render FLT line streams (JSON) as HTML.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the line-stream JSON file to convert.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output HTML file path. Defaults to <input>.html.",
    )
    parser.add_argument(
        "--body-only",
        action="store_true",
        help="Write only the contents of <body>.",
    )
    parser.add_argument(
        "--title-heading",
        action="store_true",
        help="Insert the document title as a top-level heading.",
    )
    parser.add_argument(
        "--body-class",
        action="append",
        default=[],
        metavar="CLASS",
        help="Class to add to <body> (repeatable).",
    )
    parser.add_argument(
        "--stylesheet",
        action="append",
        default=[],
        metavar="URL",
        help="External stylesheet to link (repeatable).",
    )
    parser.add_argument(
        "--no-pretty",
        action="store_true",
        help="Do not indent the output.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if not args.input:
        parser.error("the following argument is required: input")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        output_path = input_path.with_suffix(".html")

    options = RenderOptions(
        body_only=args.body_only,
        title_heading=args.title_heading,
        body_classes=args.body_class,
        stylesheets=args.stylesheet,
        pretty=not args.no_pretty,
    )

    if args.verbose:
        print(f"Input:  {input_path}")
        print(f"Output: {output_path}")

    try:
        converter = Converter(options)
        converter.convert_file(input_path, output_path, encoding=args.encoding)
    except (Flt2HtmlError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Done. {output_path.stat().st_size} bytes written.")
    else:
        print(f"Converted: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
