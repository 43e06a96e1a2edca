"""Pure lambda calculus parser: builds a syntax tree from the tokens produced by pure/lexical.py.

Formally, pure lambda calculus grammar can be succinctly defined as

```
<expression>  ::= <application>
<application> ::= <atom> <atom>*                    ; associating by left: a b c d = (((a b) c) d)
<atom>        ::= "λ" <variable> "." <expression>   ; abstraction bodies are greedy: λx.x y = λx.(x y)
                | <variable>
                | "(" <expression> ")"
```

An application ends at ")", "." or end of input, since none of those can start an atom. Parsing stops at the first
error: there is no recovery.

The descent keeps an explicit stack of pending expressions, one per open "(" or "λx.", instead of using the Python
call stack, so nesting depth is not limited by the recursion limit.

Source: https://opendsa-server.cs.vt.edu/ODSA/Books/PL/html/Syntax.html
"""

from dataclasses import dataclass
from typing import Optional

from lambdacalc.lang.error import ParseError
from lambdacalc.pure.lexical import Token, TokenType
from lambdacalc.term import Abstraction, Application, LambdaTerm, Variable


@dataclass
class Pending:
    """An expression whose application is still being read. opener is the "(" token or lambda parameter token that
    started it, or None for the root expression.
    """
    opener: Optional[Token]
    tree: Optional[LambdaTerm] = None


class Parser:
    """Top-down parser over a token sequence. source is only used for error messages."""
    STOPS = (TokenType.RPAREN, TokenType.DOT, TokenType.EOF)

    def __init__(self, tokens, source=""):
        self.tokens = tokens
        self.source = source
        self.current = 0

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def at_end(self):
        return self.peek().type is TokenType.EOF

    def advance(self):
        if not self.at_end():
            self.current += 1
        return self.previous()

    def check(self, token_type):
        return self.peek().type is token_type

    def match(self, *token_types):
        """Consumes the current token if it is one of token_types. Returns whether or not it did."""
        if any(self.check(token_type) for token_type in token_types):
            self.advance()
            return True
        return False

    def consume(self, token_type, expected):
        """Consumes and returns the current token, raising a ParseError with message expected if it isn't of
        token_type.
        """
        if self.check(token_type):
            return self.advance()
        raise ParseError(self.peek(), expected, self.source)

    def parse(self):
        """Returns the root of the syntax tree representing the entire token sequence."""
        pending = [Pending(None)]
        while True:
            expr = pending[-1]
            if expr.tree is not None and self.peek().type in Parser.STOPS:
                pending.pop()
                node = self.close(expr)
                if not pending:
                    return node
            else:
                node = self.atom(pending)
                if node is None:
                    continue

            expr = pending[-1]
            expr.tree = node if expr.tree is None else Application(expr.tree, node)

    def close(self, expr):
        """Finishes expr, whose application has ended, and returns the node it makes."""
        if expr.opener is None:
            if not self.at_end():
                raise ParseError(self.peek(), "expected end of input", self.source)
            return expr.tree

        if expr.opener.type is TokenType.LPAREN:
            self.consume(TokenType.RPAREN, "expected ')' after expression")
            return expr.tree
        return Abstraction(expr.opener.value, expr.tree)

    def atom(self, pending):
        """Consumes the start of an atom. A variable is returned as is; "(" and "λx." open a new pending expression
        instead, and None is returned.
        """
        if self.match(TokenType.LAMBDA):
            param = self.consume(TokenType.VARIABLE, "expected parameter name after lambda")
            self.consume(TokenType.DOT, "expected '.' after parameter name in lambda abstraction")
            pending.append(Pending(param))
            return None

        if self.match(TokenType.VARIABLE):
            return Variable(self.previous().value)

        if self.match(TokenType.LPAREN):
            pending.append(Pending(self.previous()))
            return None

        raise ParseError(self.peek(), "expected a variable, lambda or '('", self.source)
