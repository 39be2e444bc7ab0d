"""Command line entry point: ``bytestruct`` / ``python -m bytestruct.cli.main``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from .analyze import analyze_file

_EPILOG = """
Typical use:
  bytestruct --analyze records.py   print offsets, sizes and bit ranges
                                    of the records defined in records.py

Layout construction is logged when DEBUG is set in the environment.
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bytestruct",
        description="bytestruct: Packed Binary Records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=Path,
        help="load FILE and describe every ByteStruct and Bitfield it declares",
    )
    parser.add_argument("--version", action="version", version=f"bytestruct {__version__}")
    return parser


def _analyze(file_path: Path) -> int:
    if not file_path.is_file():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1
    try:
        analyze_file(file_path)
    except Exception as e:
        # Layout errors surface while the user's module executes
        print(f"Error analyzing {file_path}: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the bytestruct CLI.

    Args:
        argv: Arguments to parse, ``sys.argv[1:]`` when omitted

    Returns:
        Process exit status
    """
    logging.basicConfig(level=logging.DEBUG if "DEBUG" in os.environ else logging.WARNING)

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.analyze is not None:
        return _analyze(args.analyze)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
