"""Check command: run a style suite and report each case."""

import logging
import sys
from argparse import Namespace
from pathlib import Path

from citation_engine.exceptions import SuiteValidationError
from citation_engine.loader import SuiteLoader
from citation_engine.suite import SuiteRunner


logger = logging.getLogger(__name__)


def check_suite(args: Namespace) -> int:
    """
    Load and run a style suite.

    Returns:
        0 when every case passes, 1 when any fails or the file is missing,
        2 when the suite does not validate
    """
    suite_path = Path(args.suite).resolve()
    if not suite_path.exists():
        logger.error(f"Suite file not found: {suite_path}")
        return 1

    try:
        suite = SuiteLoader().load(suite_path)
    except SuiteValidationError as e:
        logger.debug(f"Suite {suite_path} failed validation with {len(e.errors)} error(s)")
        print(str(e), file=sys.stderr)
        return e.exit_code

    try:
        results = SuiteRunner().run(suite, only=args.only)
    except KeyError as e:
        logger.error(str(e.args[0]))
        return 2

    failed = 0
    for result in results:
        if result.passed:
            print(f"PASS {result.name}")
            if args.verbose:
                print(f"  got:  {result.got!r}")
        else:
            failed += 1
            print(f"FAIL {result.name}")
            print(f"  got:  {result.got!r}")
            print(f"  want: {result.want!r}")

    print(f"{len(results) - failed}/{len(results)} passed")
    return 1 if failed else 0
