"""Runs the lambdacalc interpreter on a file of λ-terms, on a Church numeral arithmetic problem, or in command-line mode.
Also uses error handling context manager. Called from the lc console script.

```
lc FILE              ; prints the normal form of every non-blank line of FILE
lc NUM OP NUM        ; prints the Church numeral of NUM OP NUM (OP is +, *, or -)
lc                   ; interactive shell
```
"""

import argparse
import sys

from lambdacalc.interpreter import calculate
from lambdacalc.lang.error import ErrorHandler, InvalidArgumentError
from lambdacalc.lang.numerical import number
from lambdacalc.lang.session import Session
from lambdacalc.lang.shell import Shell
from lambdacalc.pure.lexical import NormalOrderReducer


USAGE = "lc [options] FILE\n   or: lc [options] NUM OP NUM  (where OP is +, *, or -)\n   or: lc [options]"


def positive_int(value):
    """argparse type for --max-steps."""
    try:
        num = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if num < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {num}")
    return num


def build_parser():
    parser = argparse.ArgumentParser(prog="lc", usage=USAGE,
                                     description="Normal-order lambda calculus interpreter.")
    parser.add_argument("args", nargs="*",
                        help="FILE to interpret, or NUM OP NUM for Church arithmetic (if empty, goes to command-line "
                             "mode)")
    parser.add_argument("--max-steps", type=positive_int, default=NormalOrderReducer.STEP_LIMIT,
                        help=f"beta reduction step budget (default: {NormalOrderReducer.STEP_LIMIT})")
    parser.add_argument("--trace", action="store_true", help="print every beta reduction step")
    parser.add_argument("--decimal", action="store_true", help="also print the decimal value of arithmetic results")
    return parser


def main(argv=None):
    """Runs lc interpreter. Called from lc console script."""
    assert sys.version_info >= (3, 8), "lc cannot be run with python < 3.8"

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        error_handler.verbose = args.trace

        if len(args.args) == 1:
            sess = Session(error_handler, args.args[0], cmd_line=False, limit=args.max_steps)
            sess.run()

            for result in sess.results:
                print(result)

        elif len(args.args) == 3:
            result = calculate(*args.args, limit=args.max_steps, error_handler=error_handler)
            print(result)
            if args.decimal:
                print(number(result))

        elif not args.args:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, limit=args.max_steps)).cmdloop()

        else:
            print(f"usage: {USAGE}", file=sys.stderr)
            raise InvalidArgumentError("Invalid number of arguments: expected 1 or 3, got {}", str(len(args.args)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
