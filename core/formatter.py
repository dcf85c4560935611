"""core/formatter.py - 结果显示格式"""
import math

from config.config import FORMAT_CONFIG
from core.errors import ErrorKind

ERROR_MESSAGES = {
    ErrorKind.DIVISION_BY_ZERO: "Error: Division by zero",
    ErrorKind.MODULO_BY_ZERO: "Error: Modulo by zero",
    ErrorKind.UNKNOWN_OPERATOR: "Error: Unknown operator",
    ErrorKind.MALFORMED_EXPRESSION: "Error: Malformed expression",
}


def format_result(value):
    """
    把 float 渲染成显示字符串:
    - NaN / ±inf 使用固定标记
    - 非零且 |x| < small_threshold 或 |x| >= large_threshold 用科学计数法
    - 其余用 %g，均保留 significant_digits 位有效数字
    """
    value = float(value)
    if math.isnan(value):
        return FORMAT_CONFIG["nan_marker"]
    if math.isinf(value):
        return FORMAT_CONFIG["pos_inf_marker"] if value > 0 else FORMAT_CONFIG["neg_inf_marker"]

    digits = FORMAT_CONFIG["significant_digits"]
    magnitude = abs(value)
    if magnitude >= FORMAT_CONFIG["large_threshold"] or (0 < magnitude < FORMAT_CONFIG["small_threshold"]):
        return f"{value:.{digits - 1}e}"
    return f"{value:.{digits}g}"


def format_error(kind):
    return ERROR_MESSAGES.get(kind, "Error")
