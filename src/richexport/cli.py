"""Command-line interface for the richexport conversion engine.

Examples
--------
Convert an editor export to Markdown on stdout:
    $ richexport convert page.html --to markdown

Write a Word document:
    $ richexport convert page.html --to docx --title "Quarterly Report" -o report.docx

Read from stdin:
    $ cat page.html | richexport convert - --to txt

Run the HTTP service:
    $ richexport serve --port 8000

Use environment variables for service defaults:
    $ export RICHEXPORT_PORT=9000
    $ richexport serve
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/richexport/cli.py

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from richexport.api import EXPORT_TARGETS, export, get_export_target
from richexport.constants import TARGET_ALIASES
from richexport.exceptions import EmptyInputError, RichExportError, ValidationError

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def _get_version() -> str:
    """Get the version of the richexport package."""
    try:
        from importlib.metadata import version

        return version("richexport")
    except Exception:
        return "unknown"


def positive_int(value: str) -> int:
    """Validate positive integer for argparse."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a valid integer") from None
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return ivalue


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``richexport`` command."""
    parser = argparse.ArgumentParser(
        prog="richexport",
        description="Convert rich-text editor HTML to plain text, Markdown, HTML, DOCX or JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (serve):
  RICHEXPORT_HOST                Interface to bind (default: 127.0.0.1)
  RICHEXPORT_PORT                Port to listen on (default: 8000)
  RICHEXPORT_LOG_LEVEL           Logging level (default: INFO)
  RICHEXPORT_MAX_CONTENT_BYTES   Largest accepted request body
  RICHEXPORT_DEFAULT_FILE_NAME   File name used when a request gives none
  RICHEXPORT_DEBUG               Run Flask in debug mode (default: false)
        """,
    )
    parser.add_argument("--version", action="version", version=f"richexport {_get_version()}")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: WARNING for convert, INFO for serve)",
    )
    parser.add_argument("--log-file", type=str, help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Include timestamps and logger names in log output")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    target_choices = sorted(set(EXPORT_TARGETS) | set(TARGET_ALIASES))
    convert_parser = subparsers.add_parser("convert", help="Convert an HTML file")
    convert_parser.add_argument("input", help="HTML file to convert, or '-' for stdin")
    convert_parser.add_argument(
        "-t", "--to", dest="target", default="markdown", choices=target_choices, help="Export target"
    )
    convert_parser.add_argument(
        "-o", "--output", type=str, help="Output file or directory (default: stdout for text targets)"
    )
    convert_parser.add_argument("--title", type=str, help="Document title")
    convert_parser.add_argument("--name", type=str, help="Output file name used when --output is a directory")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP export service")
    serve_parser.add_argument("--host", type=str, default=None, help="Interface to bind")
    serve_parser.add_argument("--port", type=positive_int, default=None, help="Port to listen on")
    serve_parser.add_argument(
        "--max-content-bytes", type=positive_int, default=None, help="Largest accepted request body"
    )
    serve_parser.add_argument("--debug", action="store_true", default=None, help="Run Flask in debug mode")

    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run_convert(args: argparse.Namespace) -> int:
    """Execute the ``convert`` command."""
    try:
        content = _read_input(args.input)
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    target = get_export_target(args.target)
    if target.is_binary and not args.output:
        print(f"Error: --output is required for {target.name} output", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    name = args.name
    if name is None and args.input != "-":
        name = Path(args.input).stem

    try:
        result = export(content, target.name, file_name=name, title=args.title)
    except EmptyInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except RichExportError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if result.lossy:
        print(
            f"Warning: {target.name} output cannot represent: {', '.join(sorted(result.lost_styles))}",
            file=sys.stderr,
        )

    if args.output:
        try:
            written = result.write(args.output)
        except OSError as e:
            print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
            return EXIT_ERROR
        logger.info(f"Wrote {written}")
    else:
        text = result.content if isinstance(result.content, str) else result.content.decode("utf-8")
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
    return EXIT_SUCCESS


def run_serve(args: argparse.Namespace) -> int:
    """Execute the ``serve`` command."""
    from richexport.config import load_config_from_args
    from richexport.server import run_server

    try:
        config = load_config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    run_server(config, log_file=args.log_file, trace_mode=args.trace)
    return EXIT_SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits on --help, --version and usage errors
        return int(e.code) if isinstance(e.code, int) else EXIT_VALIDATION_ERROR

    from richexport.logging_utils import configure_logging

    default_level = "INFO" if args.command == "serve" else "WARNING"
    configure_logging(args.log_level or default_level, log_file=args.log_file, trace_mode=args.trace)

    if args.command == "convert":
        return run_convert(args)
    return run_serve(args)


if __name__ == "__main__":
    sys.exit(main())
