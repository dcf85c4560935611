"""core/token_system.py"""
from enum import Enum
import logging

from core.errors import MalformedExpressionError
from core.operators import CHAR_TO_OPERATOR, OPERATOR_DEFINITIONS, OperatorSymbol

logger = logging.getLogger(__name__)

DIGITS = '0123456789'


class TokenType(Enum):
    NUMBER = "number"  # 数值
    OPERATOR = "operator"  # 运算符
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


class Token:
    def __init__(self, token_type, text, value=None, operator=None, position=0):
        self.type = token_type
        self.text = text
        self.value = value  # 仅 NUMBER 有值
        self.operator = operator  # 仅 OPERATOR 有 OperatorSymbol
        self.position = position  # 在原始字符串中的起始位置

    @property
    def arity(self):
        if self.type != TokenType.OPERATOR:
            return 0
        return OPERATOR_DEFINITIONS[self.operator].arity

    @property
    def is_unary(self):
        return self.operator == OperatorSymbol.NEG

    def __repr__(self):
        if self.type == TokenType.NUMBER:
            return f"Token(NUMBER, {self.value})"
        if self.type == TokenType.OPERATOR:
            return f"Token(OPERATOR, {self.operator.name})"
        return f"Token({self.type.name})"


class Tokenizer:
    """把原始字符串切分成 Token 序列"""

    def __init__(self, strict=True):
        self.strict = strict

    def tokenize(self, expression):
        """
        从左到右扫描表达式
        Args:
            expression: 原始表达式字符串
        Returns:
            Token 列表
        """
        tokens = []
        i = 0
        n = len(expression)

        while i < n:
            c = expression[i]

            if c.isspace():
                i += 1
                continue

            # ================== 数字（至多一个小数点） ==================
            if c in DIGITS or c == '.':
                start = i
                seen_dot = False
                while i < n and (expression[i] in DIGITS or (expression[i] == '.' and not seen_dot)):
                    if expression[i] == '.':
                        seen_dot = True
                    i += 1
                literal = expression[start:i]
                if literal == '.':
                    self._reject(expression, start, "Lone decimal point")
                    continue
                tokens.append(Token(TokenType.NUMBER, literal, value=float(literal), position=start))
                continue

            if c == '(':
                tokens.append(Token(TokenType.LEFT_PAREN, c, position=i))
            elif c == ')':
                tokens.append(Token(TokenType.RIGHT_PAREN, c, position=i))
            elif c in CHAR_TO_OPERATOR:
                symbol = CHAR_TO_OPERATOR[c]
                if symbol == OperatorSymbol.SUB and self._is_unary_position(tokens):
                    symbol = OperatorSymbol.NEG
                tokens.append(Token(TokenType.OPERATOR, c, operator=symbol, position=i))
            else:
                self._reject(expression, i, f"Unexpected character {c!r}")
            i += 1

        return tokens

    @staticmethod
    def _is_unary_position(tokens):
        """'-' 位于开头、'(' 之后或其他运算符之后时为一元负号"""
        if not tokens:
            return True
        return tokens[-1].type in (TokenType.LEFT_PAREN, TokenType.OPERATOR)

    def _reject(self, expression, position, reason):
        if self.strict:
            raise MalformedExpressionError(f"{reason} at position {position}")
        logger.debug(f"Skipping {expression[position]!r} at position {position}: {reason}")


def tokenize(expression, strict=True):
    return Tokenizer(strict=strict).tokenize(expression)
