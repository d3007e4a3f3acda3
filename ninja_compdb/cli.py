"""
Command-line entry point for ninja-compdb.

Generates compile_commands.json from a ninja build log, or extracts the
entries matching a set of patterns from an existing compile_commands.json.
"""

import argparse
import sys
from typing import List, Optional

from . import __version__, diagnostics
from .diagnostics import DiagnosticLevel
from .errors import CompdbError
from .parameters import (
    DEFAULT_FILENAME,
    DEFAULT_OUTPUT_DIR,
    TEMPLATE_REQUEST,
    CompdbParameters,
    load_parameters,
    write_template,
)
from .pipeline import InputKind, run

NOTHING_FOUND_MESSAGES = {
    InputKind.NINJA: "Not found variable commands in ninja",
    InputKind.JSON: "No entries found in compilation database",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ninja-compdb",
        description="Generate compile_commands.json from a ninja build log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input kinds:
  .ninja  - parsed for clang/clang++ commands to build a new database
  .json   - an existing database, reduced to entries matching --pattern

Examples:
  %(prog)s -i out/soong/build.ninja -r /src/aosp
  %(prog)s -i out/soong/build.ninja -r /src/aosp -P frameworks/av -P system/media
  %(prog)s -i compile_commands.json -P hardware/ -o filtered
  %(prog)s -i build.ninja -r /src/aosp -c -      # write template.json and exit
  %(prog)s -c params.json                       # run with parameters from a file
        """,
    )

    parser.add_argument(
        "-i", "--input", metavar="FILE",
        help="Path to the input file: a .ninja log or a .json compilation database",
    )
    parser.add_argument(
        "-r", "--root", metavar="DIR",
        help="Working directory recorded in every entry (required for .ninja input)",
    )
    parser.add_argument(
        "-o", "--output", metavar="DIR", default=DEFAULT_OUTPUT_DIR,
        help="Output directory (default: %(default)s)",
    )
    parser.add_argument(
        "-f", "--filename", metavar="NAME", default=DEFAULT_FILENAME,
        help="Output filename (default: %(default)s)",
    )
    parser.add_argument(
        "-p", "--no-pretty", dest="pretty", action="store_false",
        help="Write compact JSON instead of pretty-printed JSON",
    )
    parser.add_argument(
        "-P", "--pattern", dest="patterns", metavar="PATTERN", action="append", default=[],
        help="Keep only entries whose file contains PATTERN (repeatable)",
    )
    parser.add_argument(
        "-c", "--config", metavar="FILE",
        help='Parameter file to run with; "-" writes template.json from the current parameters',
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print debug diagnostics",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        diagnostics.get_logger().set_level(DiagnosticLevel.DEBUG)

    params = CompdbParameters.from_args(args)

    try:
        if args.config == TEMPLATE_REQUEST:
            write_template(params)
            return 0
        if args.config:
            params = load_parameters(args.config)
            if args.verbose:
                diagnostics.get_logger().set_level(DiagnosticLevel.DEBUG)

        result = run(params)
    except CompdbError as e:
        diagnostics.fatal(str(e))
        return 1

    if not result.written:
        print(NOTHING_FOUND_MESSAGES[result.mode])
        return 0

    diagnostics.info(f"Wrote {result.entry_count} entries to {result.output_path}")
    print("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
