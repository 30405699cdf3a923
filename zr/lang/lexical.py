"""Lexical analysis for the zr language. Source text is turned into tokens one at a time, on demand: the parser pulls
the next token when it needs it, and no token is kept once the parser has moved past it.

Token grammar can be loosely defined as follows:

```
<ident>   ::= [A-Za-z_][A-Za-z0-9_]*        ; keywords are identifiers found in KEYWORDS
<number>  ::= [0-9]+ ("." [0-9]+)?          ; raw text is kept, value is parsed at evaluation time
<string>  ::= '"' <char>* '"'               ; no escapes, may not span lines
<symbol>  ::= "+" | "-" | "*" | "/" | "(" | ")" | "{" | "}" | ";" | "," | ":"
            | "=" | "==" | "<" | "<=" | ">" | ">=" | "!" | "!=" | "&&" | "||"

<comment> ::= "//" <char>*                  ; up to end of line
```
"""

import enum
import logging
from dataclasses import dataclass

from zr.lang.error import LexicalError


logger = logging.getLogger(__name__)


class TokenKind(enum.Enum):
    EOF = "end of input"
    IDENT = "identifier"
    NUMBER = "number"
    STRING = "string"

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    SEMICOLON = ";"
    COMMA = ","
    COLON = ":"

    ASSIGN = "="
    EQEQ = "=="
    LT = "<"
    LTEQ = "<="
    GT = ">"
    GTEQ = ">="
    BANG = "!"
    NOTEQ = "!="
    AND_AND = "&&"
    OR_OR = "||"

    LET = "let"
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    PRINT = "print"
    FUNC = "func"
    RETURN = "return"
    TRUE = "true"
    FALSE = "false"
    AND = "and"
    OR = "or"
    NOT = "not"
    LOADIN = "loadin"

    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    BOOL = "bool"
    STRING_TYPE = "string"  # type name keyword; STRING is the literal


KEYWORDS = {
    kind.value: kind for kind in (
        TokenKind.LET, TokenKind.IF, TokenKind.ELSE, TokenKind.WHILE, TokenKind.PRINT, TokenKind.FUNC,
        TokenKind.RETURN, TokenKind.TRUE, TokenKind.FALSE, TokenKind.AND, TokenKind.OR, TokenKind.NOT,
        TokenKind.LOADIN, TokenKind.INT, TokenKind.INT32, TokenKind.INT64, TokenKind.FLOAT, TokenKind.BOOL,
        TokenKind.STRING_TYPE,
    )
}

SINGLE = {
    "+": TokenKind.PLUS, "-": TokenKind.MINUS, "*": TokenKind.STAR, "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN, ")": TokenKind.RPAREN, "{": TokenKind.LBRACE, "}": TokenKind.RBRACE,
    ";": TokenKind.SEMICOLON, ",": TokenKind.COMMA, ":": TokenKind.COLON,
}

# first char: (kind alone, kind when followed by second char, second char)
DOUBLE = {
    "=": (TokenKind.ASSIGN, TokenKind.EQEQ, "="),
    "<": (TokenKind.LT, TokenKind.LTEQ, "="),
    ">": (TokenKind.GT, TokenKind.GTEQ, "="),
    "!": (TokenKind.BANG, TokenKind.NOTEQ, "="),
    "&": (None, TokenKind.AND_AND, "&"),
    "|": (None, TokenKind.OR_OR, "|"),
}


def _is_digit(char):
    return char.isascii() and char.isdigit()


@dataclass
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int

    def __str__(self):
        return self.text if self.kind is not TokenKind.EOF else self.kind.value


class Lexer:
    """Pull-model tokenizer. Call next_token repeatedly (or iterate) until a TokenKind.EOF token is returned."""

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def _peek(self, offset=0):
        """Returns the char offset chars ahead of the current position, or "" past end of input."""
        idx = self.pos + offset
        return self.source[idx] if idx < len(self.source) else ""

    def _advance(self):
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _skip_whitespace_and_comments(self):
        while True:
            while self._peek() and self._peek().isspace():
                self._advance()

            if self._peek() == "/" and self._peek(1) == "/":
                while self._peek() and self._peek() != "\n":
                    self._advance()
                continue
            break

    def _read_while(self, predicate):
        start = self.pos
        while self._peek() and predicate(self._peek()):
            self._advance()
        return self.source[start:self.pos]

    def _read_number(self):
        text = self._read_while(_is_digit)
        if self._peek() == "." and _is_digit(self._peek(1)):
            text += self._advance()
            text += self._read_while(_is_digit)
        return text

    def _read_string(self, token):
        self._advance()  # opening quote
        start = self.pos
        while self._peek() != "\"":
            if not self._peek() or self._peek() == "\n":
                raise LexicalError("unterminated string literal", "\"", at=token)
            self._advance()
        text = self.source[start:self.pos]
        self._advance()  # closing quote
        return text

    def next_token(self):
        """Returns the next token in the source. Raises LexicalError on a character that starts no token."""
        self._skip_whitespace_and_comments()
        token = Token(TokenKind.EOF, "", self.line, self.column)
        char = self._peek()

        if not char:
            pass

        elif char.isascii() and (char.isalpha() or char == "_"):
            token.text = self._read_while(lambda c: c.isascii() and (c.isalnum() or c == "_"))
            token.kind = KEYWORDS.get(token.text, TokenKind.IDENT)

        elif _is_digit(char):
            token.text = self._read_number()
            token.kind = TokenKind.NUMBER

        elif char == "\"":
            token.text = self._read_string(token)
            token.kind = TokenKind.STRING

        elif char in SINGLE:
            token.text = self._advance()
            token.kind = SINGLE[char]

        elif char in DOUBLE:
            alone, doubled, second = DOUBLE[char]
            if self._peek(1) == second:
                token.text = self._advance() + self._advance()
                token.kind = doubled
            elif alone is None:
                raise LexicalError("unexpected character '{}' (did you mean '{}'?)", (char, char * 2), at=token)
            else:
                token.text = self._advance()
                token.kind = alone

        else:
            raise LexicalError("unexpected character '{}'", char, at=token)

        logger.debug("token %s %r at %d:%d", token.kind.name, token.text, token.line, token.column)
        return token

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return
