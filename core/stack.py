"""core/stack.py - 定容栈"""
import logging

from config.config import EVALUATOR_CONFIG
from core.errors import StackOverflowError, StackUnderflowError

logger = logging.getLogger(__name__)


class BoundedStack:
    """
    固定容量的后进先出栈，值栈和操作符栈共用。

    strict=True 时溢出/下溢抛出异常；strict=False 时保持旧行为：
    满栈入栈被忽略，空栈弹出返回 default。
    """

    def __init__(self, capacity=None, strict=True, default=None):
        self.capacity = EVALUATOR_CONFIG["stack_capacity"] if capacity is None else capacity
        if self.capacity <= 0:
            raise ValueError(f"Stack capacity must be positive, got {self.capacity}")
        self.strict = strict
        self.default = default
        self._items = []

    def is_empty(self):
        return not self._items

    def is_full(self):
        return len(self._items) >= self.capacity

    def push(self, item):
        if self.is_full():
            if self.strict:
                raise StackOverflowError(f"Expression too complex (stack capacity {self.capacity})")
            logger.debug(f"Stack full, dropping {item!r}")
            return
        self._items.append(item)

    def pop(self):
        if self.is_empty():
            if self.strict:
                raise StackUnderflowError("Missing operand")
            return self.default
        return self._items.pop()

    def peek(self):
        if self.is_empty():
            if self.strict:
                raise StackUnderflowError("Missing operand")
            return self.default
        return self._items[-1]

    def clear(self):
        self._items.clear()

    def items(self):
        """栈内容快照（栈底在前）"""
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"BoundedStack({self._items!r}, capacity={self.capacity})"
