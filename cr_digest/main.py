"""
Main entry point for the Daily Digest reader.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from dotenv import find_dotenv, load_dotenv

from .core.config import DEFAULT_LOG_LEVEL, load_settings
from .core.exceptions import DigestError
from .orchestration import DailyDigestPipeline
from .processing.text_cleaner import clean_text
from .publishing import MarkdownPublisher, render_document


def setup_logging(level: str = DEFAULT_LOG_LEVEL):
    """Configure structured logging on stderr; stdout carries the document."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cr-digest",
        description="Fetch and clean the latest Congressional Record Daily Digest"
    )
    parser.add_argument(
        '--log-level',
        help='Log level for stderr output (default: LOG_LEVEL or WARNING)'
    )
    parser.set_defaults(command='run', output=None, metadata_only=False)

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    run_parser = subparsers.add_parser('run', help='Fetch, extract and clean the latest digest (default)')
    run_parser.add_argument(
        '--output',
        type=Path,
        help='Also write the markdown document to this file'
    )
    run_parser.add_argument(
        '--metadata-only',
        action='store_true',
        help='Print the digest summary without downloading the PDF'
    )

    clean_parser = subparsers.add_parser('clean', help='Clean already-extracted pdftotext output')
    clean_parser.add_argument(
        'path',
        nargs='?',
        default='-',
        help='Text file to clean (default: stdin)'
    )

    return parser


def fail(stage: str, error: Exception):
    print(f"{stage} error: {error}", file=sys.stderr)
    sys.exit(1)


def run_command(args: argparse.Namespace):
    try:
        settings = load_settings(log_level=args.log_level)
    except DigestError as e:
        fail(e.stage, e)

    setup_logging(settings.log_level)
    logger = structlog.get_logger(__name__)
    logger.info("Starting digest run",
                base_url=settings.congress_base_url,
                timeout_seconds=settings.http_timeout_seconds,
                metadata_only=args.metadata_only)

    try:
        with DailyDigestPipeline(settings) as pipeline:
            report = pipeline.run(metadata_only=args.metadata_only)
        if args.output:
            MarkdownPublisher(args.output).publish(report)
    except DigestError as e:
        fail(e.stage, e)
    except OSError as e:
        logger.error("Failed to write output", error=str(e))
        fail("output", e)

    sys.stdout.write(render_document(report))
    sys.stdout.flush()


def clean_command(args: argparse.Namespace):
    setup_logging(args.log_level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL)

    try:
        if args.path == '-':
            raw = sys.stdin.read()
        else:
            raw = Path(args.path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        fail("input", e)

    cleaned = clean_text(raw)
    if cleaned:
        sys.stdout.write(cleaned + "\n")


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Variables already in the environment win over .env
    load_dotenv(find_dotenv(usecwd=True), override=False)

    try:
        if args.command == 'clean':
            clean_command(args)
        else:
            run_command(args)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        sys.exit(130)

    sys.exit(0)


if __name__ == "__main__":
    main()
