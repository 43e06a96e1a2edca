"""Normal-order (leftmost-outermost) beta reduction of pure lambda calculus syntax trees.

The per-term rules live on the term classes themselves (see term.py); this module drives them. Reduction is
step-bounded: lambda calculus is Turing-complete, so whether a term has a normal form is undecidable in general, and
a term that is still reducible after the step budget is reported as a NonTermination error rather than looped on.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from lambdacalc import term
from lambdacalc.lang.error import NonTermination

MAX_STEPS = 1000  # default step budget


def is_free(name, tree):
    """Whether or not name occurs free in tree."""
    return tree.free(name)


def fresh_name(base, tree):
    """Returns a variation of base that does not occur free in tree."""
    return term.fresh_name(base, tree)


def substitute(tree, name, replacement):
    """Capture-avoiding substitution: tree[name := replacement]."""
    return tree.sub(name, replacement)


def step(tree):
    """Performs one normal-order reduction, or returns None if tree is in normal form."""
    return tree.step()


def render(tree):
    """Canonical text of tree. Never fails."""
    return str(tree)


def reductions(tree, max_steps):
    """Yields tree, then every term produced by successive calls to step, until a normal form is reached. step is
    called at most max_steps times, the call that finds the normal form included: a term that is not known to be in
    normal form by then raises NonTermination. A term needing n reductions therefore needs max_steps > n.
    """
    if max_steps < 0:
        raise ValueError(f"max_steps must be a natural number, got {max_steps}")

    yield tree
    for __ in range(max_steps):
        tree = tree.step()
        if tree is None:
            return
        yield tree

    raise NonTermination(max_steps)


def evaluate(tree, max_steps=MAX_STEPS):
    """Returns the normal form of tree."""
    for tree in reductions(tree, max_steps):
        pass
    return tree


def trace(tree, max_steps=MAX_STEPS):
    """Returns the normal form of tree along with the rendered form of tree before and after every step. Raises
    NonTermination the same way evaluate does: no partial trace is returned.
    """
    steps = []
    for tree in reductions(tree, max_steps):
        steps.append(render(tree))
    return tree, steps


class NormalOrderReducer:
    """Implements normal-order beta reduction of a syntax tree with a fixed step budget."""
    MAX_STEPS = MAX_STEPS

    def __init__(self, max_steps=None):
        self.max_steps = NormalOrderReducer.MAX_STEPS if max_steps is None else max_steps

    def _budget(self, max_steps):
        return self.max_steps if max_steps is None else max_steps

    def evaluate(self, tree, max_steps=None):
        """Returns the normal form of tree, raising NonTermination if it takes more than max_steps reductions."""
        return evaluate(tree, self._budget(max_steps))

    def trace(self, tree, max_steps=None):
        """Same as evaluate, but also returns the rendered form of every intermediate term."""
        return trace(tree, self._budget(max_steps))

    def __repr__(self):
        return f"NormalOrderReducer(max_steps={self.max_steps})"
