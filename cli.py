#!/usr/bin/env python3
"""
CLI interface for toolgate.

Usage:
    toolgate read notes/todo.md
    toolgate write notes/todo.md --content "text"
    toolgate edit notes/todo.md --diff-file change.diff

Runs the same tools as the MCP server, against a local directory
(--root, default cwd) or S3 (--s3, credentials from S3_API_KEY).
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from adapters.local import LocalDocumentStore
from config import get_log_level
from logging_config import configure_logging
from models import DocumentStore, FileResult, GatewayError
from tools import do_read_file, do_write_file, do_edit_file, resolve_s3_store


def _store(args: argparse.Namespace) -> DocumentStore:
    if args.s3:
        return resolve_s3_store()
    return LocalDocumentStore(args.root)


def _emit(result: FileResult | dict[str, Any]) -> int:
    payload = result.to_dict() if isinstance(result, FileResult) else result
    print(json.dumps(payload, indent=2))
    return 1 if payload.get("error") else 0


def cmd_read(args: argparse.Namespace) -> int:
    """Print a file's text."""
    return _emit(do_read_file(args.path, _store(args)))


def cmd_write(args: argparse.Namespace) -> int:
    """Create or overwrite a file."""
    content = args.content
    if content is None and not args.url:
        # Read from stdin if neither --content nor --url
        content = sys.stdin.read()
    return _emit(do_write_file(args.path, _store(args), content=content, url=args.url))


def cmd_edit(args: argparse.Namespace) -> int:
    """Apply SEARCH/REPLACE blocks."""
    if args.diff_file:
        diff = Path(args.diff_file).read_text(encoding="utf-8")
    else:
        diff = sys.stdin.read()
    return _emit(do_edit_file(args.path, diff, _store(args), dry_run=args.dry_run))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toolgate",
        description="File tools for local directories and S3-compatible storage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    toolgate read src/app.py
    toolgate --s3 read my-bucket/notes/todo.md
    echo "hello" | toolgate write notes/hello.txt
    toolgate write data/report.pdf --url https://example.com/report.pdf
    toolgate edit src/app.py --diff-file fix.diff --dry-run
""",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--root",
        default=".",
        help="Directory that local paths are relative to (default: cwd)",
    )
    target.add_argument(
        "--s3",
        action="store_true",
        help="Use S3 storage configured by S3_API_KEY",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # read
    read_p = subparsers.add_parser("read", help="Print a file's text")
    read_p.add_argument("path", help="File path")
    read_p.set_defaults(func=cmd_read)

    # write
    write_p = subparsers.add_parser("write", help="Create or overwrite a file")
    write_p.add_argument("path", help="File path")
    source = write_p.add_mutually_exclusive_group()
    source.add_argument("--content", help="File content (or read from stdin)")
    source.add_argument("--url", help="Download content from this URL")
    write_p.set_defaults(func=cmd_write)

    # edit
    edit_p = subparsers.add_parser("edit", help="Apply SEARCH/REPLACE blocks")
    edit_p.add_argument("path", help="File path")
    edit_p.add_argument(
        "--diff-file",
        help="File holding the SEARCH/REPLACE blocks (or read from stdin)",
    )
    edit_p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the patched text instead of writing it",
    )
    edit_p.set_defaults(func=cmd_edit)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(get_log_level())
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except GatewayError as e:
        return _emit(e.to_dict())


if __name__ == "__main__":
    sys.exit(main())
