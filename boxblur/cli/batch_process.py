from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Sequence

from .. import config
from ..errors import BoxBlurError
from ..pipeline.batch_blur import run_batch

logger = logging.getLogger(__name__)

USAGE = "boxblur [--log-level LEVEL] INPUTFILE1 OUTPUTFILE1 [INPUTFILE2 OUTPUTFILE2 ...]"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(
        prog="boxblur",
        usage=USAGE,
        description="Apply a 3x3 box blur to each input image and write it as PNG.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="input/output file pairs")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        default=config.LOG_LEVEL.upper(),
                        help=f"logging level (default: {config.LOG_LEVEL})")
    return parser


def _split_argv(argv: Sequence[str]) -> List[str]:
    """
    Reorder argv as options + ['--'] + files so that file names starting
    with '-' are never taken for options.
    """
    options, files = [], []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            files.extend(tokens)
        elif token in ("-h", "--help") or token.startswith("--log-level="):
            options.append(token)
        elif token == "--log-level":
            options.append(token)
            value = next(tokens, None)
            if value is not None:
                options.append(value)
        else:
            files.append(token)
    return options + (["--"] + files if files else [])


def _pairs(files: List[str]) -> List[tuple]:
    return [(files[i], files[i + 1]) for i in range(0, len(files), 2)]


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    args = parser.parse_args(_split_argv(argv))
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level: {args.log_level}")

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=args.log_level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )

    if len(args.files) < 2 or len(args.files) % 2:
        print(f"Usage: {USAGE}", file=sys.stderr)
        return 1

    try:
        written = run_batch(_pairs(args.files))
    except BoxBlurError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    logger.info(f"Blurred images written: {', '.join(str(p) for p in written)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
