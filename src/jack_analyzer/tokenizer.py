"""Lexical analysis for Jack source.

``Lexer`` scans the whole source up front and fails fast on the first
malformed token. ``Tokenizer`` is the cursor the parser drives over the
scanned tokens: it can look one token ahead (``peek``) and rewind exactly
one step (``retreat``).
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .errors import (
    EndOfInputError,
    IntegerOverflowError,
    LexicalError,
    NoPriorTokenError,
    TokenizerError,
    WrongTokenKindError,
)

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    # Values double as the XML tag of the leaf element
    KEYWORD = "keyword"
    SYMBOL = "symbol"
    IDENTIFIER = "identifier"
    INT_CONST = "integerConstant"
    STRING_CONST = "stringConstant"


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    value: int | str
    line: int = 0
    col: int = 0

    def lexeme(self) -> str:
        """The token as it would be written in source."""
        if self.kind is TokenKind.STRING_CONST:
            return f'"{self.value}"'
        return str(self.value)

    def is_keyword(self, *words: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.value in words

    def is_symbol(self, *chars: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.value in chars


KEYWORDS = frozenset(
    {
        "class",
        "constructor",
        "function",
        "method",
        "field",
        "static",
        "var",
        "int",
        "char",
        "boolean",
        "void",
        "true",
        "false",
        "null",
        "this",
        "let",
        "do",
        "if",
        "else",
        "while",
        "return",
    }
)

SYMBOLS = frozenset("{}()[].,;+-*/&|<>=~")

DIGITS = frozenset("0123456789")

WORD_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")

WORD_CHARS = WORD_START | DIGITS

# Jack integers are 16-bit words; constants are non-negative
MAX_INT = 32767


class Lexer:
    """Tokenizer for Jack source text."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        while self.pos < len(self.source):
            self._skip_whitespace_and_comments()
            if self.pos >= len(self.source):
                break

            ch = self.source[self.pos]

            if ch == '"':
                self._read_string()
            elif ch in DIGITS:
                self._read_number()
            elif ch in WORD_START:
                self._read_word()
            else:
                self._read_symbol()

        logger.debug("scanned %d tokens", len(self.tokens))
        return self.tokens

    def _peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return ""

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _skip_whitespace_and_comments(self):
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in " \t\r\n\f":
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                while self.pos < len(self.source) and self.source[self.pos] != "\n":
                    self._advance()
            elif ch == "/" and self._peek(1) == "*":
                # Covers /** doc comments as well
                start_line, start_col = self.line, self.column
                self._advance()
                self._advance()
                while not (self._peek() == "*" and self._peek(1) == "/"):
                    if self.pos >= len(self.source):
                        raise LexicalError("unterminated block comment", start_line, start_col)
                    self._advance()
                self._advance()
                self._advance()
            else:
                break

    def _read_string(self):
        start_line, start_col = self.line, self.column
        self._advance()  # opening quote

        value = ""
        while self._peek() != '"':
            if self.pos >= len(self.source) or self._peek() == "\n":
                raise LexicalError("unterminated string constant", start_line, start_col)
            value += self._advance()

        self._advance()  # closing quote
        self.tokens.append(
            Token(kind=TokenKind.STRING_CONST, value=value, line=start_line, col=start_col)
        )

    def _read_number(self):
        start_line, start_col = self.line, self.column
        digits = ""
        while self._peek() in DIGITS:
            digits += self._advance()

        value = int(digits)
        if value > MAX_INT:
            raise IntegerOverflowError(
                f"integer constant {digits} exceeds {MAX_INT}", start_line, start_col
            )
        self.tokens.append(
            Token(kind=TokenKind.INT_CONST, value=value, line=start_line, col=start_col)
        )

    def _read_word(self):
        start_line, start_col = self.line, self.column
        word = ""
        while self._peek() in WORD_CHARS:
            word += self._advance()

        kind = TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENTIFIER
        self.tokens.append(Token(kind=kind, value=word, line=start_line, col=start_col))

    def _read_symbol(self):
        start_line, start_col = self.line, self.column
        ch = self._advance()
        if ch not in SYMBOLS:
            raise LexicalError(f"unexpected character {ch!r}", start_line, start_col)
        self.tokens.append(Token(kind=TokenKind.SYMBOL, value=ch, line=start_line, col=start_col))


class Tokenizer:
    """Cursor over a scanned token sequence.

    ``advance`` moves onto the next token and makes it current. ``retreat``
    undoes the most recent ``advance`` and is allowed only once between
    advances. ``peek`` shows the next token without moving.
    """

    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._pos = 0  # index of the next token to advance into
        self._can_retreat = False

    @classmethod
    def from_source(cls, source: str) -> "Tokenizer":
        return cls(Lexer(source).tokenize())

    def has_more(self) -> bool:
        return self._pos < len(self._tokens)

    def advance(self) -> Token:
        if not self.has_more():
            raise EndOfInputError("advance() called with no tokens remaining")
        self._pos += 1
        self._can_retreat = True
        return self._tokens[self._pos - 1]

    def retreat(self) -> None:
        if not self._can_retreat:
            raise NoPriorTokenError("retreat() requires an advance() since the last retreat")
        self._pos -= 1
        self._can_retreat = False

    def peek(self) -> Token | None:
        if self.has_more():
            return self._tokens[self._pos]
        return None

    @property
    def current(self) -> Token:
        if self._pos == 0:
            raise TokenizerError("no current token; call advance() first")
        return self._tokens[self._pos - 1]

    @property
    def last(self) -> Token | None:
        """The final token of the stream, used to position end-of-input errors."""
        return self._tokens[-1] if self._tokens else None

    def kind(self) -> TokenKind:
        return self.current.kind

    def keyword(self) -> str:
        return self._value_of(TokenKind.KEYWORD)

    def symbol(self) -> str:
        return self._value_of(TokenKind.SYMBOL)

    def identifier(self) -> str:
        return self._value_of(TokenKind.IDENTIFIER)

    def int_val(self) -> int:
        return self._value_of(TokenKind.INT_CONST)

    def string_val(self) -> str:
        return self._value_of(TokenKind.STRING_CONST)

    def _value_of(self, kind: TokenKind):
        tok = self.current
        if tok.kind is not kind:
            raise WrongTokenKindError(f"current token is {tok.kind.value}, not {kind.value}")
        return tok.value


def tokenize(source: str) -> list[Token]:
    """Scan Jack source into a list of tokens."""
    return Lexer(source).tokenize()
