import logging
import math
import operator
from dataclasses import dataclass
from typing import Callable

from calcline.errors import CalcError
from calcline.tokenizer import EMPTY, Token, Tokenizer, TokenType

logger = logging.getLogger(__name__)


@dataclass
class ParserError(CalcError):
    errmsg: str
    token: Token

    def __str__(self) -> str:
        return self.errmsg


def _divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is nan"""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BinaryOperationImpl = Callable[[float, float], float]

ADDITIVE_OPERATIONS: dict[str, BinaryOperationImpl] = {"+": operator.add, "-": operator.sub}
# "%" is a valid token but has no grammar rule; "a % b" fails as trailing input
MULTIPLICATIVE_OPERATIONS: dict[str, BinaryOperationImpl] = {"*": operator.mul, "/": _divide}


class Evaluator:
    """Parses and evaluates one line in a single pass, without building a tree.

    Two token registers drive the grammar: ``current`` is the token a rule is
    looking at (or, once a sub-expression is done, a NUMBER token holding its
    value) and ``look_ahead`` is the next unconsumed token. ``advance`` is the
    only way tokens move through them.
    """

    def __init__(self, tokenizer: Tokenizer) -> None:
        self.tokenizer = tokenizer
        self.current: Token = EMPTY
        self.look_ahead: Token = EMPTY

    def advance(self) -> Token:
        previous = self.current
        self.current = self.look_ahead
        self.look_ahead = self.tokenizer.next()
        logger.debug("advance: current=%s look_ahead=%s", self.current, self.look_ahead)
        return previous

    def evaluate(self) -> float:
        self.advance()
        self.advance()
        try:
            result = self.eval_additive()
        except ParserError:
            # input left over outweighs whatever went wrong inside it
            if self.look_ahead.type is not TokenType.END:
                raise ParserError("invalid expression", token=self.look_ahead) from None
            raise
        if self.look_ahead.type is not TokenType.END:
            raise ParserError("invalid expression", token=self.look_ahead)
        return result

    def eval_additive(self) -> float:
        return self._eval_left_fold(ADDITIVE_OPERATIONS, self.eval_multiplicative)

    def eval_multiplicative(self) -> float:
        return self._eval_left_fold(MULTIPLICATIVE_OPERATIONS, self.eval_unary)

    def _eval_left_fold(self, operations: dict[str, BinaryOperationImpl], eval_term: Callable[[], float]) -> float:
        eval_term()
        while self.look_ahead.is_operator(*operations):
            op1 = self._number_value(self.advance())
            operator_token = self.advance()
            op2 = eval_term()
            self.current = Token.number(operations[operator_token.lexeme](op1, op2))
        return self._number_value(self.current)

    def eval_unary(self) -> float:
        if not self.current.is_operator("+", "-"):
            return self.eval_primary()
        sign = self.advance()
        operand = self.eval_primary()
        result = -operand if sign.lexeme == "-" else operand
        self.current = Token.number(result)
        return result

    def eval_primary(self) -> float:
        if self.current.is_operator("("):
            self.advance()
            result = self.eval_additive()
            if not self.look_ahead.is_operator(")"):
                raise ParserError("unmatched bracket", token=self.look_ahead)
            # drop ")" and keep the group's value in current
            self.current = self.advance()
            return result
        elif self.current.type is TokenType.NUMBER and self.current.value is not None:
            return self.current.value
        else:
            raise ParserError("invalid operator", token=self.current)

    @staticmethod
    def _number_value(token: Token) -> float:
        if token.type is not TokenType.NUMBER or token.value is None:
            raise ParserError("error occurred", token=token)
        return token.value


def evaluate(code: str) -> float:
    return Evaluator(Tokenizer(code)).evaluate()
