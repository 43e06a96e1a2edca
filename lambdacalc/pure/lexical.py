"""Pure lambda calculus tokenizer.

The `pure` directory contains pure lambda calculus lexing and reduction- not sufficient for the lang layer, which
adds named definitions, numbers and comments on top.

Tokens are defined as follows:

```
<lambda>   ::= "\" | "λ"                 ; interchangeable, both produce a LAMBDA token
<dot>      ::= "."
<lparen>   ::= "("
<rparen>   ::= ")"
<variable> ::= <letter> (<letter> | <digit>)*
```

Whitespace (space, tab, CR, LF) separates tokens and is never emitted. Letters are ASCII only, so `λ` can never be
mistaken for the start of a variable.
"""

from dataclasses import dataclass
from enum import Enum
from string import ascii_letters, digits
from typing import Optional

from lambdacalc.lang.error import LexError


class TokenType(Enum):
    LAMBDA = "Lambda"
    VARIABLE = "Variable"
    DOT = "Dot"
    LPAREN = "LParen"
    RPAREN = "RParen"
    EOF = "EndOfInput"


@dataclass(frozen=True)
class Token:
    """Single lexical unit. position is the character (not byte) offset of the token's first character within the
    trimmed input.
    """
    type: TokenType
    value: Optional[str] = None
    position: int = 0

    LEXEMES = {
        TokenType.LAMBDA: "λ",
        TokenType.DOT: ".",
        TokenType.LPAREN: "(",
        TokenType.RPAREN: ")",
        TokenType.EOF: "",
    }

    @property
    def lexeme(self):
        """Literal surface form of this token. Both lambda spellings give 'λ'."""
        if self.type is TokenType.VARIABLE:
            return self.value
        return Token.LEXEMES[self.type]

    def __str__(self):
        return self.lexeme or self.type.value


class Lexer:
    """Converts raw text into a finite token stream."""
    LAMBDAS = "\\λ"
    WHITESPACE = " \t\r\n"
    SINGLES = {".": TokenType.DOT, "(": TokenType.LPAREN, ")": TokenType.RPAREN}

    def __init__(self, text):
        self.text = text.strip()
        self.position = 0

    def at_end(self):
        return self.position >= len(self.text)

    def peek(self):
        """Returns current character, or '' if at end of input."""
        if self.at_end():
            return ""
        return self.text[self.position]

    def advance(self):
        char = self.peek()
        if char:
            self.position += 1
        return char

    def skip_whitespace(self):
        while not self.at_end() and self.peek() in Lexer.WHITESPACE:
            self.advance()

    def read_variable(self):
        """Consumes the maximal run of letters and digits starting at the current position."""
        start = self.position
        while self.peek() and self.peek() in ascii_letters + digits:
            self.advance()
        return self.text[start:self.position]

    def next_token(self):
        """Returns the next Token, or an EOF token when the input is exhausted. Raises LexError on a character that
        starts no token.
        """
        self.skip_whitespace()

        start = self.position
        if self.at_end():
            return Token(TokenType.EOF, position=start)

        char = self.peek()
        if char in Lexer.LAMBDAS:
            self.advance()
            return Token(TokenType.LAMBDA, position=start)
        elif char in Lexer.SINGLES:
            self.advance()
            return Token(Lexer.SINGLES[char], position=start)
        elif char in ascii_letters:
            return Token(TokenType.VARIABLE, self.read_variable(), start)

        raise LexError(char, start, self.text)

    def tokenize(self):
        """Returns every token in the input, in order. The last token is always EOF."""
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type is TokenType.EOF:
                return tokens
