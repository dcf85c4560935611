"""中缀表达式求值器 - 双栈调度场算法"""
import logging

from config.config import EVALUATOR_CONFIG
from core.errors import EvaluationError, MalformedExpressionError
from core.formatter import format_error, format_result
from core.operators import OPERATOR_DEFINITIONS, apply_operator, get_precedence
from core.stack import BoundedStack
from core.token_system import TokenType, Tokenizer

logger = logging.getLogger(__name__)


class EvaluationResult:
    """求值结果：value 与 error 二者只有一个非空"""

    def __init__(self, expression, value=None, error=None, message=None):
        self.expression = expression
        self.value = value
        self.error = error  # ErrorKind
        self.message = message

    @property
    def ok(self):
        return self.error is None

    @property
    def display(self):
        if self.ok:
            return format_result(self.value)
        return format_error(self.error)

    def __repr__(self):
        if self.ok:
            return f"EvaluationResult({self.expression!r}, value={self.value})"
        return f"EvaluationResult({self.expression!r}, error={self.error.name})"


class InfixEvaluator:
    """评估中缀表达式的值，每次调用使用独立的栈，不保留状态"""

    def __init__(self, strict=None, stack_capacity=None, epsilon=None, stack_factory=None):
        self.strict = EVALUATOR_CONFIG["strict"] if strict is None else strict
        self.stack_capacity = EVALUATOR_CONFIG["stack_capacity"] if stack_capacity is None else stack_capacity
        if self.stack_capacity <= 0:
            raise ValueError(f"stack_capacity must be positive, got {self.stack_capacity}")
        self.epsilon = EVALUATOR_CONFIG["epsilon"] if epsilon is None else epsilon
        self.underflow_default = EVALUATOR_CONFIG["underflow_default"]
        self.stack_factory = stack_factory or BoundedStack
        self.tokenizer = Tokenizer(strict=self.strict)

    def _new_stack(self, default=None):
        return self.stack_factory(capacity=self.stack_capacity, strict=self.strict, default=default)

    def evaluate(self, expression):
        """
        评估表达式
        Args:
            expression: 只含数字、'.'、运算符、括号和空白的字符串
        Returns:
            float
        Raises:
            EvaluationError 的子类，kind 属性给出错误类别
        """
        if expression is None or not expression.strip():
            raise MalformedExpressionError("Expression is empty")

        tokens = self.tokenizer.tokenize(expression)
        if not tokens:
            raise MalformedExpressionError("Expression has no evaluable tokens")
        return self.evaluate_tokens(tokens)

    def try_evaluate(self, expression):
        """不抛出求值错误的版本，失败时返回带 error 的 EvaluationResult"""
        try:
            value = self.evaluate(expression)
        except EvaluationError as e:
            logger.warning(f"Failed to evaluate '{expression}': {e}")
            return EvaluationResult(expression, error=e.kind, message=str(e))
        return EvaluationResult(expression, value=value)

    def evaluate_tokens(self, tokens):
        values = self._new_stack(default=self.underflow_default)
        operators = self._new_stack()
        group_starts = []  # 每个 '(' 入栈时值栈的深度

        for token in tokens:
            if token.type == TokenType.NUMBER:
                values.push(token.value)

            elif token.type == TokenType.LEFT_PAREN:
                operators.push(token)
                if self.strict:
                    group_starts.append(len(values))

            elif token.type == TokenType.RIGHT_PAREN:
                self._close_paren(values, operators, group_starts)

            elif token.type == TokenType.OPERATOR:
                # 一元负号: -x 归约为 0 - x
                if token.is_unary:
                    values.push(0.0)
                self._drain_for(token, values, operators)
                operators.push(token)

        # ================== 清空剩余操作符 ==================
        while not operators.is_empty():
            if operators.peek().type == TokenType.LEFT_PAREN and self.strict:
                raise MalformedExpressionError("Unbalanced parentheses: missing ')'")
            self._reduce(values, operators)

        return self._finalize(values)

    def _drain_for(self, token, values, operators):
        """新运算符入栈前，按优先级和结合性归约栈顶运算符"""
        incoming = OPERATOR_DEFINITIONS[token.operator]
        while not operators.is_empty():
            top = operators.peek()
            if top.type != TokenType.OPERATOR:
                break
            top_precedence = get_precedence(top.operator)
            if incoming.is_right_associative:
                should_reduce = incoming.precedence < top_precedence
            else:
                should_reduce = incoming.precedence <= top_precedence
            if not should_reduce:
                break
            self._reduce(values, operators)

    def _close_paren(self, values, operators, group_starts):
        while not operators.is_empty() and operators.peek().type != TokenType.LEFT_PAREN:
            self._reduce(values, operators)

        if operators.is_empty():
            if self.strict:
                raise MalformedExpressionError("Unbalanced parentheses: unexpected ')'")
            logger.debug("Ignoring unmatched ')'")
            return
        operators.pop()

        # 括号内必须产生一个值，"2+()3" 之类在严格模式下报错
        if self.strict and len(values) <= group_starts.pop():
            raise MalformedExpressionError("Empty parentheses")

    def _reduce(self, values, operators):
        op = operators.pop()
        b = values.pop()
        a = values.pop()
        # 宽松模式下残留的 '(' 没有 operator，归约时报 UnknownOperator
        symbol = op.operator if op.operator is not None else op.text
        values.push(apply_operator(symbol, a, b, self.epsilon))

    def _finalize(self, values):
        if values.is_empty():
            raise MalformedExpressionError("Missing operand")
        if self.strict and len(values) != 1:
            raise MalformedExpressionError(f"Expected a single result, found {len(values)} values")
        result = values.pop()
        values.clear()
        return result


def evaluate(expression, strict=None):
    return InfixEvaluator(strict=strict).evaluate(expression)


def try_evaluate(expression, strict=None):
    return InfixEvaluator(strict=strict).try_evaluate(expression)
