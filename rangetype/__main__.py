#!/usr/bin/env python3
import argparse
import logging
import sys

from rangetype.static import check_paths


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="rangetype-check",
        description="Reject out-of-range integer literals before the code runs",
    )
    parser.add_argument(
        "paths", nargs="+", help="Python files or directories to check (recursive)"
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="print nothing, only set the exit status",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log every file checked"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    violations = check_paths(args.paths)
    if not args.quiet:
        for violation in violations:
            print(violation)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
