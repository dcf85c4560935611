"""core/errors.py - 求值错误分类"""
from enum import Enum


class ErrorKind(Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    MODULO_BY_ZERO = "modulo_by_zero"
    UNKNOWN_OPERATOR = "unknown_operator"
    MALFORMED_EXPRESSION = "malformed_expression"


class EvaluationError(ValueError):
    """所有求值错误的基类，kind 标识错误类别"""
    kind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, message=None):
        super().__init__(message or self.kind.value)


class DivisionByZeroError(EvaluationError):
    kind = ErrorKind.DIVISION_BY_ZERO


class ModuloByZeroError(EvaluationError):
    kind = ErrorKind.MODULO_BY_ZERO


class UnknownOperatorError(EvaluationError):
    kind = ErrorKind.UNKNOWN_OPERATOR


class MalformedExpressionError(EvaluationError):
    kind = ErrorKind.MALFORMED_EXPRESSION


class StackOverflowError(MalformedExpressionError):
    """栈已满时继续入栈（表达式过于复杂）"""


class StackUnderflowError(MalformedExpressionError):
    """空栈弹出（操作数不足）"""
