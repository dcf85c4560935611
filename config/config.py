"""配置文件"""

# 表达式求值器参数
EVALUATOR_CONFIG = {
    "stack_capacity": 100,  # 值栈/操作符栈容量
    "epsilon": 1e-10,  # 除数绝对值小于该值视为零
    "strict": True,  # 严格模式：未知字符、括号不匹配、栈溢出均报错
    "underflow_default": 0.0,  # 宽松模式下空栈弹出的默认值
}

# 结果格式化参数
FORMAT_CONFIG = {
    "significant_digits": 10,
    "small_threshold": 1e-10,  # 非零且小于该值时使用科学计数法
    "large_threshold": 1e10,  # 大于等于该值时使用科学计数法
    "nan_marker": "Error: Invalid input",
    "pos_inf_marker": "Infinity",
    "neg_inf_marker": "-Infinity",
}

# 计算器会话参数
SESSION_CONFIG = {
    "max_history": 10,  # 历史记录条数上限
    "last_result_token": "ans",
    "memory_token": "mem",
}

# 命令行参数
CLI_CONFIG = {
    "prompt": "> ",
    "default_column": "expression",
    "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert EVALUATOR_CONFIG["stack_capacity"] > 0, "栈容量必须为正"
    assert 0 < EVALUATOR_CONFIG["epsilon"] < 1, "epsilon必须在(0, 1)之间"
    assert FORMAT_CONFIG["significant_digits"] >= 1, "有效数字至少1位"
    assert FORMAT_CONFIG["small_threshold"] < FORMAT_CONFIG["large_threshold"], "科学计数法阈值顺序错误"
    assert SESSION_CONFIG["max_history"] > 0, "历史记录上限必须为正"
    assert SESSION_CONFIG["last_result_token"] != SESSION_CONFIG["memory_token"], "占位符不能重名"
    return True
