"""会话模块 - 计算器状态和占位符替换"""
from .state import CalculatorState, HistoryEntry
from .calculator import Calculator, substitute_named_values, is_valid_number

__all__ = ['CalculatorState', 'HistoryEntry', 'Calculator', 'substitute_named_values', 'is_valid_number']
