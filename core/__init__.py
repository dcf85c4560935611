"""核心模块 - 栈、运算符表、分词器、求值器和格式化"""
from .errors import (
    ErrorKind, EvaluationError, DivisionByZeroError, ModuloByZeroError,
    UnknownOperatorError, MalformedExpressionError, StackOverflowError,
    StackUnderflowError
)
from .stack import BoundedStack
from .operators import (
    OperatorSymbol, Associativity, OPERATOR_DEFINITIONS, Operators, apply_operator
)
from .token_system import TokenType, Token, Tokenizer, tokenize
from .formatter import format_result, format_error
from .infix_evaluator import InfixEvaluator, EvaluationResult, evaluate, try_evaluate

__all__ = [
    'ErrorKind', 'EvaluationError', 'DivisionByZeroError', 'ModuloByZeroError',
    'UnknownOperatorError', 'MalformedExpressionError', 'StackOverflowError',
    'StackUnderflowError', 'BoundedStack', 'OperatorSymbol', 'Associativity',
    'OPERATOR_DEFINITIONS', 'Operators', 'apply_operator', 'TokenType', 'Token',
    'Tokenizer', 'tokenize', 'format_result', 'format_error', 'InfixEvaluator',
    'EvaluationResult', 'evaluate', 'try_evaluate'
]
