"""Uses implementation of pure lambda calculus/lang layer to interpret .lc files, evaluate a single expression, or run
in command-line mode. Also uses error handling context manager. Called from the lambdacalc console script.
"""

import argparse

from lambdacalc.interpreter import LambdaCalculus
from lambdacalc.lang.error import ErrorHandler
from lambdacalc.lang.session import Session
from lambdacalc.lang.shell import Shell
from lambdacalc.lc import run_examples
from lambdacalc.pure.reducer import NormalOrderReducer


def print_steps(steps):
    for idx, step in enumerate(steps):
        print(f"  {idx}: {step}")


def main(argv=None):
    """Runs lambdacalc interpreter. Called from lambdacalc executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lambdacalc", description="Untyped lambda calculus interpreter.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-e", "--expr", help="evaluate a single expression and exit")
        parser.add_argument("--steps", action="store_true", help="print every reduction step")
        parser.add_argument("--max-steps", type=int, default=NormalOrderReducer.MAX_STEPS,
                            help="reduction budget before giving up (default: %(default)s)")
        parser.add_argument("--examples", action="store_true", help="run the built-in examples and exit")
        args = parser.parse_args(argv)

        calculus = LambdaCalculus(args.max_steps)

        if args.examples:
            run_examples(calculus)

        elif args.expr is not None:
            sess = Session(error_handler, Session.SH_FILE, calculus, cmd_line=True)
            error_handler.fatal = True  # a single expression is not interactive

            sess.add(sess.preprocess_line(args.expr))
            sess.run(with_steps=args.steps)

            for steps in sess.traces:
                print_steps(steps)
            while sess.results:
                print(sess.pop())

        elif args.file is not None:
            sess = Session(error_handler, args.file, calculus, cmd_line=False)
            sess.run(with_steps=args.steps)

            for steps in sess.traces:
                print_steps(steps)
                print(sess.pop())
            while sess.results:
                print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, calculus, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
