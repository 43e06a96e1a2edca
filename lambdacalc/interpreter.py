"""Lambda calculus interpreter.

For reference:
- "Pure lambda calculus": lambda calculus as defined by Church, see term.py, pure/ and grammar/
- "lang": the layer on top of pure lambda calculus used by the shell and .lc files (definitions, numbers, comments),
  see lang/

Basic program flow:
    1. Lexer: converts the input text into a token sequence (pure/lexical.py)
    2. Parser: builds a syntax tree from the tokens by recursive descent (grammar/pure.py)
    3. Reducer: beta-reduces the syntax tree in normal order until no redex is left, or the step budget runs out
       (pure/reducer.py)
    4. Rendering: the resulting syntax tree is converted back to canonical text

Everything in this module either returns or raises (LexError, ParseError, NonTermination): nothing is printed.
"""

from dataclasses import dataclass
from typing import Tuple

from lambdacalc.grammar.pure import Parser
from lambdacalc.pure.lexical import Lexer
from lambdacalc.pure.reducer import NormalOrderReducer, render as render_tree
from lambdacalc.term import LambdaTerm


@dataclass(frozen=True)
class Reduction:
    """Normal form of a term, along with the rendered form of the term before and after every reduction step."""
    result: LambdaTerm
    steps: Tuple[str, ...]


class LambdaCalculus:
    """Entry point to the core: parse, evaluate and render λ-terms."""

    def __init__(self, max_steps=None):
        self.reducer = NormalOrderReducer(max_steps)

    @property
    def max_steps(self):
        return self.reducer.max_steps

    def parse(self, text):
        """Returns the syntax tree of text."""
        lexer = Lexer(text)
        return Parser(lexer.tokenize(), lexer.text).parse()

    def evaluate(self, text, max_steps=None):
        """Returns the normal form of text."""
        return self.reducer.evaluate(self.parse(text), max_steps)

    def evaluate_with_steps(self, text, max_steps=None):
        """Returns the normal form of text as a Reduction, which also contains every intermediate step."""
        result, steps = self.reducer.trace(self.parse(text), max_steps)
        return Reduction(result, tuple(steps))

    @staticmethod
    def render(tree):
        return render_tree(tree)


_default = LambdaCalculus()


def parse(text):
    return _default.parse(text)


def evaluate(text, max_steps=NormalOrderReducer.MAX_STEPS):
    return _default.evaluate(text, max_steps)


def evaluate_with_steps(text, max_steps=NormalOrderReducer.MAX_STEPS):
    return _default.evaluate_with_steps(text, max_steps)


def render(tree):
    return render_tree(tree)
