"""core/operators.py - 运算符表及归约函数"""
from enum import Enum
import logging

import numpy as np

from config.config import EVALUATOR_CONFIG
from core.errors import DivisionByZeroError, ModuloByZeroError, UnknownOperatorError

EPSILON = EVALUATOR_CONFIG["epsilon"]  # 防止除零的最小值

logger = logging.getLogger(__name__)


class OperatorSymbol(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    MOD = "%"
    NEG = "u-"  # 一元负号，按 0 - x 归约


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


class OperatorDefinition:
    def __init__(self, symbol, precedence, associativity, reducer, arity=2, display=None):
        self.symbol = symbol
        self.precedence = precedence
        self.associativity = associativity
        self.reducer = reducer  # 方法名，对应 Operators 中的静态方法
        self.arity = arity
        self.display = display or symbol.value

    @property
    def is_right_associative(self):
        return self.associativity == Associativity.RIGHT

    def __repr__(self):
        return f"OperatorDefinition({self.display!r}, precedence={self.precedence}, arity={self.arity})"


# 运算符定义字典
OPERATOR_DEFINITIONS = {
    OperatorSymbol.ADD: OperatorDefinition(OperatorSymbol.ADD, 1, Associativity.LEFT, 'add'),
    OperatorSymbol.SUB: OperatorDefinition(OperatorSymbol.SUB, 1, Associativity.LEFT, 'sub'),
    OperatorSymbol.MUL: OperatorDefinition(OperatorSymbol.MUL, 2, Associativity.LEFT, 'mul'),
    OperatorSymbol.DIV: OperatorDefinition(OperatorSymbol.DIV, 2, Associativity.LEFT, 'div'),
    OperatorSymbol.MOD: OperatorDefinition(OperatorSymbol.MOD, 2, Associativity.LEFT, 'mod'),
    OperatorSymbol.POW: OperatorDefinition(OperatorSymbol.POW, 3, Associativity.RIGHT, 'pow'),

    # 一元负号：求值器先压入隐式 0，优先级高于乘除且从不触发出栈
    OperatorSymbol.NEG: OperatorDefinition(OperatorSymbol.NEG, 3, Associativity.RIGHT, 'sub',
                                           arity=1, display='-'),
}

# 字符到二元运算符的映射（'-' 的一元/二元由分词器判定）
CHAR_TO_OPERATOR = {
    '+': OperatorSymbol.ADD,
    '-': OperatorSymbol.SUB,
    '*': OperatorSymbol.MUL,
    '/': OperatorSymbol.DIV,
    '^': OperatorSymbol.POW,
    '%': OperatorSymbol.MOD,
}


def get_precedence(symbol):
    return OPERATOR_DEFINITIONS[symbol].precedence


def is_left_associative(symbol):
    return not OPERATOR_DEFINITIONS[symbol].is_right_associative


class Operators:
    """所有归约函数的静态方法集合，输入输出均为 float"""

    @staticmethod
    def add(a, b, epsilon=EPSILON):
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(a) + np.float64(b))

    @staticmethod
    def sub(a, b, epsilon=EPSILON):
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(a) - np.float64(b))

    @staticmethod
    def mul(a, b, epsilon=EPSILON):
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(a) * np.float64(b))

    @staticmethod
    def div(a, b, epsilon=EPSILON):
        """除法：除数绝对值小于 epsilon 视为除零"""
        if abs(b) < epsilon:
            raise DivisionByZeroError("Division by zero")
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(a) / np.float64(b))

    @staticmethod
    def mod(a, b, epsilon=EPSILON):
        """取模：与 C fmod 一致，结果符号跟随被除数"""
        if abs(b) < epsilon:
            raise ModuloByZeroError("Modulo by zero")
        with np.errstate(invalid='ignore'):
            return float(np.fmod(np.float64(a), np.float64(b)))

    @staticmethod
    def pow(a, b, epsilon=EPSILON):
        """实数幂：负底数配分数指数得到 NaN，溢出得到 inf"""
        with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
            return float(np.power(np.float64(a), np.float64(b)))


def apply_operator(symbol, a, b, epsilon=EPSILON):
    """
    对两个操作数应用运算符。
    Args:
        symbol: OperatorSymbol（宽松模式下可能混入非运算符记号）
        a, b: 左右操作数
        epsilon: 除零判定阈值
    Returns:
        归约结果 float
    """
    definition = OPERATOR_DEFINITIONS.get(symbol) if isinstance(symbol, OperatorSymbol) else None
    if definition is None:
        raise UnknownOperatorError(f"Unknown operator: {symbol}")

    op_method = getattr(Operators, definition.reducer)
    result = op_method(a, b, epsilon)
    logger.debug(f"Reduced {a} {definition.display} {b} -> {result}")
    return result
