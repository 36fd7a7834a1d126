"""Lexical analysis for the monkey language: scans raw source text into a lazy sequence of tokens.

The token vocabulary can be loosely defined as follows:

```
<ident>    ::= (<letter> | "_")+        ; unless the run is a keyword: let fn true false if else return
<int>      ::= <digit>+                 ; kept as text, converted to a number by the parser
<operator> ::= "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">" | "==" | "!="
<delim>    ::= "(" | ")" | "{" | "}" | "," | ";"
```

Whitespace separates tokens and is otherwise ignored. The lexer never fails: any other character is emitted as an
ILLEGAL token for the parser to reject, and once the input is exhausted every call returns an EOF token.
"""

import enum
import string
from dataclasses import dataclass, field


class TokenKind(enum.Enum):
    """Closed set of token kinds. Values are the canonical text of each kind."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"

    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.value


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

SINGLE_CHARS = {
    "=": TokenKind.ASSIGN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "!": TokenKind.BANG,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

# first char: kind emitted when followed by "="
DOUBLE_CHARS = {
    "=": TokenKind.EQ,
    "!": TokenKind.NOT_EQ,
}

WHITESPACE = " \t\r\n"
LETTERS = string.ascii_letters + "_"
DIGITS = string.digits

EOF_LITERAL = "<EOF>"


@dataclass(frozen=True)
class Token:
    """Classified lexical unit. start is the offset of the token in the source and is only used for diagnostics."""
    kind: TokenKind
    literal: str
    start: int = field(default=0, compare=False)

    @property
    def end(self):
        if self.kind is TokenKind.EOF:
            return self.start + 1
        return self.start + len(self.literal)

    def __repr__(self):
        return f"Token({self.kind.name}, '{self.literal}')"


class Lexer:
    """Scans source one token at a time. Iterating over a Lexer yields tokens up to and including the first EOF."""

    def __init__(self, source):
        self.source = source
        self.position = 0

    @property
    def char(self):
        """Character under the cursor, or "" past the end of source."""
        return self._char_at(self.position)

    def _char_at(self, position):
        return self.source[position] if position < len(self.source) else ""

    def _read_run(self, chars):
        """Advances past the maximal run of chars starting at the cursor and returns it."""
        start = self.position
        while self.char and self.char in chars:
            self.position += 1
        return self.source[start:self.position]

    def next_token(self):
        """Consumes and returns exactly one Token."""
        self._read_run(WHITESPACE)
        start = self.position
        char = self.char

        if not char:
            return Token(TokenKind.EOF, EOF_LITERAL, start)

        if char in LETTERS:
            literal = self._read_run(LETTERS)
            return Token(KEYWORDS.get(literal, TokenKind.IDENT), literal, start)

        if char in DIGITS:
            return Token(TokenKind.INT, self._read_run(DIGITS), start)

        if char in DOUBLE_CHARS and self._char_at(self.position + 1) == "=":
            self.position += 2
            return Token(DOUBLE_CHARS[char], char + "=", start)

        self.position += 1
        return Token(SINGLE_CHARS.get(char, TokenKind.ILLEGAL), char, start)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                break
