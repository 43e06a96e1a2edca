"""Lambda calculus syntax tree.

A λ-term is exactly one of

```
Variable(name)             ; x
Abstraction(param, body)   ; λx.M
Application(left, right)   ; M N
```

Terms are immutable: every operation below returns a new term (sharing untouched subtrees) instead of modifying the
one it was called on. The per-kind rules are abstract methods of LambdaTerm, so a new kind of term that does not
implement all of them cannot be instantiated.

Walking the whole tree (free, left_outer_redex, set, __str__) is done with an explicit stack, so the depth of a term
is not limited by the interpreter's recursion limit. Substitution recurses, but only as deep as the body of the redex
being reduced.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class LambdaTerm(ABC):
    """Superclass that represents any λ-term. Sub terms are addressed by index paths: [] is the term itself, [0] its
    first node, [0, 1] the second node of its first node, and so on.
    """

    @property
    @abstractmethod
    def nodes(self):
        """Tuple of this term's direct sub terms."""

    @abstractmethod
    def replace(self, idx, node):
        """Returns a copy of this term with its idx-th node replaced by node."""

    @abstractmethod
    def binds(self, name):
        """Whether or not this term binds name for its nodes."""

    @abstractmethod
    def sub(self, name, new_term):
        """Returns this term with every free occurrence of name replaced by new_term. Bound variables are renamed
        where new_term would otherwise be captured.
        """

    @property
    @abstractmethod
    def is_redex(self):
        """Whether or not this term can be beta-reduced as a whole."""

    @abstractmethod
    def layout(self):
        """List of strings and sub terms that, once every sub term is rendered, make up the text of this term."""

    @property
    def tokenizable(self):
        """Whether or not this term has sub terms."""
        return bool(self.nodes)

    def free(self, name):
        """Whether or not name occurs free (not bound by an enclosing abstraction over name) in this term."""
        stack = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Variable) and node.name == name:
                return True
            if not node.binds(name):
                stack.extend(node.nodes)
        return False

    def left_outer_redex(self):
        """Returns the index path to the redex that normal-order reduction contracts next, or None if this term is in
        normal form. Both nodes of an application are reduced before the application itself, left node first.
        """
        stack = [(self, None, False)]  # trail is a linked list of (idx, parent trail) back to self
        while stack:
            node, trail, visited = stack.pop()
            if visited:
                if node.is_redex:
                    path = []
                    while trail is not None:
                        idx, trail = trail
                        path.append(idx)
                    return path[::-1]
                continue

            stack.append((node, trail, True))
            for idx, sub_node in reversed(list(enumerate(node.nodes))):
                stack.append((sub_node, (idx, trail), False))
        return None

    def get(self, idxs):
        """Gets node at positions specified by idxs. idxs=[] will return self."""
        node = self
        for idx in idxs:
            node = node.nodes[idx]
        return node

    def set(self, idxs, node):
        """Returns a copy of self with the node at positions specified by idxs replaced by node. idxs=[] will return
        node.
        """
        parents = [self]
        for idx in idxs[:-1]:
            parents.append(parents[-1].nodes[idx])

        for parent, idx in reversed(list(zip(parents, idxs))):
            node = parent.replace(idx, node)
        return node

    def step(self):
        """Performs one normal-order reduction and returns the result, or returns None if this term is in normal
        form.
        """
        path = self.left_outer_redex()
        if path is None:
            return None

        redex = self.get(path)
        return self.set(path, redex.left.apply(redex.right))

    def __str__(self):
        parts = []
        stack = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                stack.extend(reversed(item.layout()))
        return "".join(parts)


def fresh_name(base, term):
    """Returns base with primes appended until it does not occur free in term."""
    name = base + "'"
    while term.free(name):
        name += "'"
    return name


@dataclass(frozen=True)
class Variable(LambdaTerm):
    name: str

    @property
    def nodes(self):
        return ()

    def replace(self, idx, node):
        raise IndexError(f"variable '{self.name}' has no nodes")

    def binds(self, name):
        return False

    def sub(self, name, new_term):
        return new_term if self.name == name else self

    @property
    def is_redex(self):
        return False

    def layout(self):
        return [self.name]


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    param: str
    body: LambdaTerm

    @property
    def nodes(self):
        return (self.body,)

    def replace(self, idx, node):
        if idx != 0:
            raise IndexError(f"abstraction has no node {idx}")
        return Abstraction(self.param, node)

    def binds(self, name):
        return self.param == name

    def sub(self, name, new_term):
        # (λx.M)[x := N] = λx.M
        if self.param == name:
            return self

        # (λy.M)[x := N] = λy'.(M[y := y'][x := N]) if y is free in N, y' free in neither M nor N
        if new_term.free(self.param) and self.body.free(name):
            param = fresh_name(self.param, Application(new_term, self.body))
            body = self.body.sub(self.param, Variable(param))
            return Abstraction(param, body.sub(name, new_term))

        # (λy.M)[x := N] = λy.(M[x := N])
        return Abstraction(self.param, self.body.sub(name, new_term))

    def apply(self, argument):
        """Beta reduction: (λx.M) N = M[x := N]."""
        return self.body.sub(self.param, argument)

    @property
    def is_redex(self):
        return False

    def layout(self):
        return ["(λ", self.param, ".", self.body, ")"]


@dataclass(frozen=True)
class Application(LambdaTerm):
    left: LambdaTerm
    right: LambdaTerm

    @property
    def nodes(self):
        return (self.left, self.right)

    def replace(self, idx, node):
        if idx == 0:
            return Application(node, self.right)
        elif idx == 1:
            return Application(self.left, node)
        raise IndexError(f"application has no node {idx}")

    def binds(self, name):
        return False

    def sub(self, name, new_term):
        return Application(self.left.sub(name, new_term), self.right.sub(name, new_term))

    @property
    def is_redex(self):
        """Applications are the only terms that can be redexes: an Application is a redex if its left node is an
        Abstraction.
        """
        return isinstance(self.left, Abstraction)

    def layout(self):
        if self.right.tokenizable:
            return [self.left, " (", self.right, ")"]
        return [self.left, " ", self.right]
