"""Runs the monkey interpreter on a .monkey file, or in command-line mode. Also uses error handling context manager.
Installed as the monkey executable.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import os
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.shell import Shell
from monkey.lang.session import Session


def get_parser():
    parser = argparse.ArgumentParser(prog="monkey", description="Monkey language interpreter.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--no-color", action="store_true", help="disable colored error output")
    parser.add_argument("--recursion-limit", type=int, metavar="N",
                        help="maximum depth of the Python stack (deeply recursive programs need more)")
    parser.add_argument("--tree", action="store_true", help="print the syntax tree of each input before running it")
    return parser


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    assert sys.version_info >= (3, 7), "monkey cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = get_parser().parse_args(argv)

        if args.no_color:
            os.environ["ANSI_COLORS_DISABLED"] = "1"
        if args.recursion_limit is not None:
            sys.setrecursionlimit(args.recursion_limit)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_tree=args.tree)
            sess.run()

            while sess.results:
                print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_tree=args.tree)).cmdloop()


if __name__ == "__main__":
    main()
