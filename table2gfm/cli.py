#!/usr/bin/env python3
"""
table2gfm CLI

Command-line interface for document-to-GFM conversion with the code table
filter, plus the pandoc JSON filter entry point.

Usage:
    table2gfm <source> [options]
    table2gfm guide.docx
    table2gfm ./documents/              # convert all files in directory
    table2gfm setup.docx deploy.docx    # convert multiple files

    pandoc guide.docx -t gfm --wrap=none --filter table2gfm-filter

Options:
    -o, --output DIR     Output directory (default: ./table2gfm_output)
    --stdout             Print to stdout instead of saving files
    --pandoc PATH        pandoc executable to use
    -v, --verbose        Debug logging
"""

import argparse
import logging
import sys

from .core import Converter, PandocError, apply_filter
from .pandoc_json import PandocJSONError


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="table2gfm",
        description=(
            "Document-to-GFM converter\n\n"
            "Converts Word and other pandoc-readable documents into GitHub\n"
            "flavoured Markdown, turning single-cell code tables into clean\n"
            "one-column Markdown tables."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  table2gfm guide.docx\n"
            "  table2gfm ./docs/                     # whole directory\n"
            "  table2gfm a.docx b.odt                # multiple files\n"
            "  table2gfm guide.docx --stdout         # print to terminal\n"
            "  table2gfm guide.docx -o ./markdown    # custom output dir\n"
        ),
    )

    parser.add_argument(
        "sources",
        nargs="*",
        help="Files or directories to convert",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output directory (default: ./table2gfm_output)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print Markdown to stdout instead of saving to files",
    )
    parser.add_argument(
        "--pandoc",
        default=None,
        help="Path to the pandoc executable (default: $TABLE2GFM_PANDOC or PATH)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if not args.sources:
        parser.print_help()
        print("\nError: No sources provided. Specify files or directories to convert.")
        sys.exit(1)

    try:
        engine = Converter(output_dir=args.output, pandoc_path=args.pandoc)
    except PandocError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    save = not args.stdout
    success_count = 0
    error_count = 0

    for source in args.sources:
        try:
            md_text = engine.convert(source, save=save)
            if args.stdout:
                print(md_text)
            success_count += 1
        except (PandocError, PandocJSONError, FileNotFoundError, ValueError) as e:
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1

    print(f"Done: {success_count} converted, {error_count} errors", file=sys.stderr)
    if save:
        print(f"Output: {engine.output_dir}", file=sys.stderr)

    if error_count:
        sys.exit(1)


def filter_main(argv=None):
    """
    pandoc JSON filter entry point.

    pandoc passes the target format as the first argument; the filter
    does not depend on it.
    """
    parser = argparse.ArgumentParser(
        prog="table2gfm-filter",
        description="pandoc JSON filter: rewrites single-cell code tables as GFM tables",
    )
    parser.add_argument("format", nargs="?", help="Target format passed by pandoc (ignored)")
    parser.parse_args(argv)
    _setup_logging(False)

    json_text = sys.stdin.buffer.read().decode("utf-8")
    try:
        output = apply_filter(json_text)
    except PandocJSONError as e:
        print(f"table2gfm-filter: {e}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.buffer.write(output.encode("utf-8"))
    sys.stdout.flush()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )


if __name__ == "__main__":
    main()
