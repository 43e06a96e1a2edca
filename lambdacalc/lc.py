"""Runs a fixed set of pure lambda calculus examples, printing every reduction step and the result of each. Called
from main.py with --examples, or directly.
"""

from lambdacalc.interpreter import LambdaCalculus
from lambdacalc.lang.error import GenericException

EXAMPLES = [
    "\\x.x",                            # identity
    "(\\x.x) y",                        # identity applied to a variable
    "(\\x.x x) (\\y.y)",                # self-application
    "\\x.\\y.x",                        # Church true
    "\\x.\\y.y",                        # Church false
    "\\f.\\x.f x",                      # Church numeral 1
    "\\f.\\x.f (f x)",                  # Church numeral 2
    "\\f.(\\x.f (x x)) (\\x.f (x x))",  # Y combinator
]


def run_examples(calculus=None, examples=None, out=print):
    """Evaluates each example with calculus, printing its steps. An example that fails is reported and skipped."""
    if calculus is None:
        calculus = LambdaCalculus()
    if examples is None:
        examples = EXAMPLES

    for example in examples:
        out(f"\nInput: {example}")
        try:
            reduction = calculus.evaluate_with_steps(example)
        except GenericException as error:
            out(f"Error: {error.msg}")
            continue

        out("Steps:")
        for idx, step in enumerate(reduction.steps):
            out(f"  {idx}: {step}")
        out(f"Result: {calculus.render(reduction.result)}")


if __name__ == "__main__":
    run_examples()
