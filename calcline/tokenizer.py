import enum
import logging
import string
from dataclasses import dataclass
from typing import Iterator, Optional

from calcline.errors import CalcError
from calcline.utils import PrintableEnum, excerpt_with_caret

logger = logging.getLogger(__name__)


@dataclass
class TokenizerError(CalcError):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        return "\n".join([f"[Tokenizer error] {self.errmsg}", *excerpt_with_caret(self.code, self.error_char_idx)])


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    OPERATOR = enum.auto()
    EMPTY = enum.auto()
    END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str = ""
    value: Optional[float] = None
    position: Optional[int] = None

    @classmethod
    def number(cls, value: float, lexeme: Optional[str] = None, position: Optional[int] = None) -> "Token":
        if lexeme is None:
            lexeme = str(value)
        return cls(type=TokenType.NUMBER, lexeme=lexeme, value=value, position=position)

    @classmethod
    def operator(cls, symbol: str, position: Optional[int] = None) -> "Token":
        return cls(type=TokenType.OPERATOR, lexeme=symbol, position=position)

    def is_operator(self, *symbols: str) -> bool:
        return self.type is TokenType.OPERATOR and self.lexeme in symbols

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


EMPTY = Token(type=TokenType.EMPTY)
END = Token(type=TokenType.END)

OPERATOR_CHARS = frozenset("+-*/%()")


class Tokenizer:
    """Lazily cuts tokens off the front of a single input line.

    Holds no lookahead: every ``next()`` consumes input, and once the line is
    exhausted every call returns ``END``.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0

    @property
    def remaining(self) -> str:
        return self.code[self.pos :]

    def next(self) -> Token:
        while self.pos < len(self.code) and self.code[self.pos].isspace():
            self.pos += 1
        if self.pos >= len(self.code):
            return END

        start = self.pos
        char = self.code[start]
        if char in string.digits:
            end = start + 1
            while end < len(self.code) and self.code[end] in string.digits:
                end += 1
            lexeme = self.code[start:end]
            self.pos = end
            # overlong digit runs come out as inf rather than failing
            token = Token.number(float(lexeme), lexeme=lexeme, position=start)
        elif char in OPERATOR_CHARS:
            self.pos = start + 1
            token = Token.operator(char, position=start)
        else:
            raise TokenizerError(f"Unexpected character: {char!r}", code=self.code, error_char_idx=start)

        logger.debug("token %s at %d", token, start)
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token.type is TokenType.END:
                return
            yield token


def tokenize(code: str) -> list[Token]:
    tokens = list(Tokenizer(code))
    tokens.append(END)
    return tokens
