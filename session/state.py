"""session/state.py - 计算器状态（内存、上次结果、历史记录）"""
import logging

from config.config import SESSION_CONFIG

logger = logging.getLogger(__name__)


class HistoryEntry:
    def __init__(self, expression, value):
        self.expression = expression
        self.value = value

    def __iter__(self):
        return iter((self.expression, self.value))

    def __eq__(self, other):
        if not isinstance(other, HistoryEntry):
            return NotImplemented
        return (self.expression, self.value) == (other.expression, other.value)

    def __repr__(self):
        return f"HistoryEntry({self.expression!r}, {self.value})"


class CalculatorState:
    """
    由调用方显式持有的计算器状态。
    求值器本身无状态，'ans'/'mem' 在求值前按此状态替换为数值。
    """

    def __init__(self, max_history=None):
        self.max_history = SESSION_CONFIG["max_history"] if max_history is None else max_history
        if self.max_history <= 0:
            raise ValueError(f"max_history must be positive, got {self.max_history}")
        self.memory = 0.0
        self.last_result = 0.0
        self.history = []

    def store_memory(self, value):
        self.memory = float(value)
        logger.debug(f"Memory set to {self.memory}")

    def recall_memory(self):
        return self.memory

    def clear_memory(self):
        self.memory = 0.0

    def add_to_history(self, expression, value):
        """追加一条历史记录，超过上限时丢弃最旧的"""
        self.history.append(HistoryEntry(expression, float(value)))
        while len(self.history) > self.max_history:
            self.history.pop(0)

    def clear_history(self):
        self.history.clear()

    def reset(self):
        self.clear_memory()
        self.clear_history()
        self.last_result = 0.0

    def snapshot(self):
        """按值拷贝的快照，用于替换占位符"""
        copy = CalculatorState(max_history=self.max_history)
        copy.memory = self.memory
        copy.last_result = self.last_result
        copy.history = list(self.history)
        return copy
