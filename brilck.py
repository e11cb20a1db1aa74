#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse

from bril_analysis import CheckResult
from bril_context import CheckContext, LogLevel
from bril_driver import BrilDriver
from bril_logger import log_error, log_info


def print_diagnostics(result: CheckResult, context: CheckContext) -> None:
    for diag in result.diagnostics:
        log_error(context, diag.format())


def build_check_context(args: argparse.Namespace) -> CheckContext:
    """Build a CheckContext from command-line arguments."""
    # Log format
    log_rich_format = getattr(args, 'log', False)

    # Convert verbosity count to LogLevel
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return CheckContext(
        log_rich_format=log_rich_format,
        log_level=log_level,
        exit_zero=getattr(args, 'exit_zero', False),
    )


def cmd_check(args: argparse.Namespace) -> int:
    """Check a Bril JSON program read from --file or standard input."""
    context = build_check_context(args)
    driver = BrilDriver(context=context)

    if args.file:
        log_info(context, f"Reading program from {args.file}")
        result = driver.check_file(args.file)
    else:
        log_info(context, "Reading program from standard input")
        result = driver.check_stream()

    print_diagnostics(result, context)

    if result.program is None:
        # Nothing was checked
        return 1
    if context.exit_zero:
        return 0
    return 1 if result.has_errors() else 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="brilck", description="Type checker for Bril JSON programs")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")
    parser.add_argument(
        "-f", "--file",
        help="The Bril JSON file to check (default: standard input)",
    )
    parser.add_argument(
        "--exit-zero",
        action="store_true",
        help="Exit with status 0 once the check completes, even if errors were reported",
    )

    return parser


def main(argv=None) -> None:
    args = build_arg_parser().parse_args(argv)

    rc = cmd_check(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
