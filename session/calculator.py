"""计算器会话 - 占位符替换、历史记录和批量求值"""
import logging
import math
import re

import numpy as np
import pandas as pd

from config.config import SESSION_CONFIG
from core.errors import EvaluationError, MalformedExpressionError
from core.formatter import format_error, format_result
from core.infix_evaluator import EvaluationResult, InfixEvaluator
from session.state import CalculatorState

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)$')


def is_valid_number(text):
    """是否为分词器可接受的十进制字面量（允许前导符号）"""
    if text is None:
        return False
    return bool(_NUMBER_PATTERN.match(text.strip()))


def _literal(value):
    """把 float 写成不含指数的字面量，负数加括号"""
    if not math.isfinite(value):
        raise MalformedExpressionError(f"Cannot substitute non-finite value {value}")
    text = np.format_float_positional(value, trim='-')
    if value < 0:
        return f"({text})"
    return text


def substitute_named_values(expression, state):
    """
    把表达式中的 'ans' 和 'mem'（整词，不区分大小写）替换为状态中的数值
    Args:
        expression: 原始表达式
        state: CalculatorState
    Returns:
        可直接交给求值器的字符串
    """
    named = {
        SESSION_CONFIG["last_result_token"].lower(): state.last_result,
        SESSION_CONFIG["memory_token"].lower(): state.memory,
    }
    pattern = re.compile(r'\b(' + '|'.join(re.escape(name) for name in named) + r')\b', re.IGNORECASE)

    def _replace(match):
        return _literal(named[match.group(1).lower()])

    substituted = pattern.sub(_replace, expression)
    if substituted != expression:
        logger.debug(f"Substituted '{expression}' -> '{substituted}'")
    return substituted


class Calculator:

    def __init__(self, state=None, strict=None, max_history=None):
        self.state = CalculatorState(max_history=max_history) if state is None else state
        self.evaluator = InfixEvaluator(strict=strict)

    def calculate(self, expression):
        """
        替换占位符后求值；成功时更新上次结果和历史记录，失败时状态不变
        Raises:
            EvaluationError
        """
        prepared = substitute_named_values(expression, self.state.snapshot())
        value = self.evaluator.evaluate(prepared)
        self.state.last_result = value
        self.state.add_to_history(expression, value)
        return value

    def try_calculate(self, expression):
        try:
            value = self.calculate(expression)
        except EvaluationError as e:
            logger.warning(f"Failed to calculate '{expression}': {e}")
            return EvaluationResult(expression, error=e.kind, message=str(e))
        return EvaluationResult(expression, value=value)

    # 内存操作====================
    def store_memory(self, value=None):
        """不传 value 时保存上次结果"""
        self.state.store_memory(self.state.last_result if value is None else value)

    def recall_memory(self):
        return self.state.recall_memory()

    def clear_memory(self):
        self.state.clear_memory()

    # 历史记录====================
    @property
    def history(self):
        return list(self.state.history)

    def clear_history(self):
        self.state.clear_history()

    def history_frame(self):
        """历史记录转 DataFrame，列: expression, value, display"""
        rows = [{'expression': entry.expression,
                 'value': entry.value,
                 'display': format_result(entry.value)} for entry in self.state.history]
        return pd.DataFrame(rows, columns=['expression', 'value', 'display'])

    # 批量求值====================
    def evaluate_many(self, expressions):
        """
        批量求值，不修改会话状态
        Args:
            expressions: 表达式序列（list 或 pd.Series）
        Returns:
            DataFrame，列: expression, value, error, display；失败行 value 为 NaN
        """
        if isinstance(expressions, pd.Series):
            index = expressions.index
            expressions = expressions.tolist()
        else:
            index = None

        snapshot = self.state.snapshot()
        rows = []
        for expression in expressions:
            expression = '' if expression is None or (isinstance(expression, float) and math.isnan(expression)) \
                else str(expression)
            try:
                value = self.evaluator.evaluate(substitute_named_values(expression, snapshot))
                rows.append({'expression': expression, 'value': value,
                             'error': None, 'display': format_result(value)})
            except EvaluationError as e:
                logger.debug(f"Batch row '{expression}' failed: {e}")
                rows.append({'expression': expression, 'value': np.nan,
                             'error': e.kind.value, 'display': format_error(e.kind)})

        frame = pd.DataFrame(rows, columns=['expression', 'value', 'error', 'display'])
        if index is not None:
            frame.index = index
        failed = frame['error'].notna().sum()
        logger.info(f"Evaluated {len(frame)} expressions, {failed} failed")
        return frame
