"""Runs .zr files, or the zr shell in command-line mode, using the zr language implementation and its error handling
context manager. Called from the zr console script (and python -m zr).
"""

import argparse
import logging
import sys

from zr.lang.error import ColoredFormatter, ErrorHandler
from zr.lang.session import Session
from zr.lang.shell import Shell


LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbosity):
    """Sends zr log records to stderr. verbosity is the number of -v flags given."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter("[%(levelname)s] %(name)s: %(message)s"))

    logger = logging.getLogger("zr")
    logger.handlers = [handler]
    logger.setLevel(LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)])
    logger.propagate = False


def main(argv=None):
    """Runs zr interpreter. Called from zr executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="zr", description="zr language interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-v", "--verbose", action="count", default=0,
                            help="log pipeline stages to stderr (-v for info, -vv for debug)")
        parser.add_argument("--scoped", action="store_true",
                            help="give blocks their own variable scope instead of one global scope")
        args = parser.parse_args(argv)

        configure_logging(args.verbose)

        sess = Session(error_handler, scoped=args.scoped)
        if args.file is not None:
            sess.run(args.file)
        else:
            Shell(sess).cmdloop()
