"""Natural numbers encoded as Church numerals. Note that operations are not implemented here (see the SUCC, PLUS and
MULT definitions in lang/session.py) and that numerals are built from plain λ-terms, thus keeping everything as pure
as possible.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

import re

from lambdacalc.lang.error import GenericException
from lambdacalc.term import Abstraction, Application, Variable

NUMBER = re.compile(r"\b\d+\b")


def cnumber(num):
    """Returns Church numeral of num (cnum = Church numeral): λf.λx.f (f (... x))."""
    try:
        assert not isinstance(num, (float, bool))
        num = int(num)
        assert num >= 0
    except (AssertionError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Variable("x")
    for __ in range(num):
        body = Application(Variable("f"), body)

    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns the natural number cnum encodes. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    f, x = cnum.param, cnum.body.param
    if f == x:
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        if nth_body.left != Variable(f):
            return None
        nth_body = nth_body.right
        num += 1

    return num if nth_body == Variable(x) else None


def cnumberify(expr):
    """Replaces every standalone natural number in expr with the text of its Church numeral."""
    return NUMBER.sub(lambda match: f"({cnumber(match.group())})", expr)
