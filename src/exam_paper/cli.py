"""
Module: cli

Purpose:
    Headless dual export from the command line.

    exam-paper QUESTIONS.json --out DIR [--layout vertical|horizontal]
        [--school-name ...] [--subject ...] [--date ...] [--watermark ...]
        [--font-dir DIR] [--allow-extended-options] [-v]

    Exit codes: 0 both files delivered, 1 a variant failed, 2 bad input.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from exam_paper import __version__
from exam_paper.builder import ExportConfig, LoaderError, export_pair, load_questions
from exam_paper.builder.layout import ComposerConfig, OptionOverflow
from exam_paper.builder.output import DirectoryDeliverer, register_fonts
from exam_paper.core.models import HeaderMetadata, LayoutMode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exam-paper",
        description="Export an exam paper as questions-only and with-answers PDFs",
    )
    parser.add_argument("questions", type=Path, help="JSON file with the question collection")
    parser.add_argument("--out", type=Path, required=True, help="Directory to write both PDFs to")
    parser.add_argument(
        "--layout",
        choices=[mode.value for mode in LayoutMode],
        default=LayoutMode.VERTICAL.value,
        help="Question layout (default: vertical)",
    )
    parser.add_argument("--school-name", default="", help="School name printed in the header")
    parser.add_argument("--subject", default="", help="Subject printed in the header")
    parser.add_argument("--date", default="", help="Date printed in the header")
    parser.add_argument("--watermark", default="", help="Watermark text drawn across each page")
    parser.add_argument("--font-dir", type=Path, help="Directory with TrueType fonts")
    parser.add_argument(
        "--allow-extended-options",
        action="store_true",
        help="Letter options beyond Z as AA, AB, ... instead of failing",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    register_fonts(args.font_dir, search_system=True)

    try:
        questions = load_questions(args.questions)
    except LoaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    header = HeaderMetadata(
        school_name=args.school_name,
        subject=args.subject,
        date=args.date,
        watermark=args.watermark,
    )
    overflow = OptionOverflow.EXTEND if args.allow_extended_options else OptionOverflow.REJECT
    config = ExportConfig(composer=ComposerConfig(option_overflow=overflow))

    result = export_pair(
        questions,
        LayoutMode.parse(args.layout),
        header,
        deliverer=DirectoryDeliverer(args.out),
        config=config,
    )

    for path in result.delivered.values():
        if path is not None:
            print(path)

    if not result.completed:
        print(f"Error: {result.error_summary}", file=sys.stderr)
        return EXIT_EXPORT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
