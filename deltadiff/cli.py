"""CLI entry point for deltadiff."""

from __future__ import annotations

import argparse
import sys

from deltadiff import __version__
from deltadiff.emit import AMOS, PLAIN, STYLES
from deltadiff.exceptions import ChainConsistencyError, DeltaDiffError
from deltadiff.log import get_logger, setup_logging, verbosity_to_level
from deltadiff.pipeline import DiffOptions, run_diff

EXIT_ERROR = 1
EXIT_USAGE = 2  # argparse exits with this on bad arguments

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deltadiff",
        description=(
            "Classify the breaks between a reference and a query assembly "
            "(gaps, sequence jumps, chain jumps, inversions, indels and "
            "duplications) from an alignment delta file"
        ),
    )
    parser.add_argument("deltafile", help="Alignment delta file (.delta or .delta.gz)")
    parser.add_argument("-f", dest="output", action="store_const", const=AMOS, default=PLAIN,
                        help="Output diff information as AMOS features")
    parser.add_argument("--output", choices=STYLES, default=PLAIN,
                        help="Output style (default: plain)")
    parser.add_argument("-q", dest="ref_diff", action="store_false",
                        help="Show break information for queries only")
    parser.add_argument("-r", dest="qry_diff", action="store_false",
                        help="Show break information for references only")
    parser.add_argument("-t", "--threads", type=int, default=1,
                        help="Diff sequences on this many threads")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v INFO, -vv DEBUG)")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbosity_to_level(args.verbose))

    if args.threads < 1:
        parser.error("--threads must be at least 1")

    options = DiffOptions(
        ref_diff=args.ref_diff,
        qry_diff=args.qry_diff,
        style=args.output,
        workers=args.threads,
    )

    try:
        run_diff(args.deltafile, options)
    except ChainConsistencyError as e:
        logger.error("Internal consistency failure: %s", e)
        sys.exit(EXIT_ERROR)
    except DeltaDiffError as e:
        logger.error("%s", e)
        sys.exit(EXIT_ERROR)
    except OSError as e:
        logger.error("Could not read %s: %s", args.deltafile, e)
        sys.exit(EXIT_ERROR)
