"""主程序入口 - 单个表达式、批量CSV和交互模式"""
import argparse
import logging
import sys

import pandas as pd

from config.config import CLI_CONFIG, validate_config
from core import format_error, format_result
from session import Calculator, is_valid_number

logger = logging.getLogger(__name__)

REPL_HELP = """Commands:
  ms [x]   store x (or the last result) in memory
  mr       recall memory
  mc       clear memory
  history  show recent calculations
  clear    clear history
  quit     exit
Use 'ans' for the last result and 'mem' for the memory value."""


def run_single(calculator, expression, out=None):
    result = calculator.try_calculate(expression)
    print(result.display, file=out)
    return 0 if result.ok else 1


def run_batch(calculator, input_file, column, output_file=None, out=None):
    """从CSV读取表达式列批量求值"""
    logger.info(f"Loading expressions from {input_file}")
    dataset = pd.read_csv(input_file, dtype=str, keep_default_na=False)

    if column not in dataset.columns:
        raise ValueError(f"Column '{column}' not found in {input_file}.")

    results = calculator.evaluate_many(dataset[column])

    if output_file:
        results.to_csv(output_file, index=False)
        logger.info(f"Results written to {output_file}")
    else:
        print(results.to_string(index=False), file=out)

    return 0 if results['error'].isna().all() else 1


def _handle_command(calculator, command, out):
    """处理交互模式命令；不是命令时返回 False"""
    name, _, argument = command.partition(' ')
    argument = argument.strip()
    if name == 'ms':
        if argument and not is_valid_number(argument):
            print(f"Invalid number: {argument}", file=out)
            return True
        calculator.store_memory(float(argument) if argument else None)
        print(f"Memory = {format_result(calculator.recall_memory())}", file=out)
    elif command == 'mr':
        print(format_result(calculator.recall_memory()), file=out)
    elif command == 'mc':
        calculator.clear_memory()
        print("Memory cleared", file=out)
    elif command == 'history':
        if not calculator.history:
            print("No history", file=out)
        for i, (expression, value) in enumerate(calculator.history, 1):
            print(f"{i:2d}. {expression} = {format_result(value)}", file=out)
    elif command == 'clear':
        calculator.clear_history()
        print("History cleared", file=out)
    elif command in ('help', '?'):
        print(REPL_HELP, file=out)
    else:
        return False
    return True


def run_repl(calculator, stdin=None, out=None):
    stdin = stdin or sys.stdin
    print("Enter an expression (type 'help' for commands, 'quit' to exit)", file=out)
    while True:
        print(CLI_CONFIG["prompt"], end='', file=out, flush=True)
        line = stdin.readline()
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        command = line.lower()
        if command in ('quit', 'exit', 'q'):
            break
        if _handle_command(calculator, command, out):
            continue

        result = calculator.try_calculate(line)
        if result.ok:
            print(f"= {result.display}", file=out)
        else:
            print(format_error(result.error), file=out)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Infix expression calculator")
    parser.add_argument("-e", "--expression", type=str, default=None,
                        help="Evaluate a single expression and exit")
    parser.add_argument("--input_file", "--input-file", dest="input_file", type=str, default=None,
                        help="CSV file with expressions to evaluate")
    parser.add_argument("--column", type=str, default=CLI_CONFIG["default_column"],
                        help="Column holding the expressions in the input file")
    parser.add_argument("--output_file", "--output-file", dest="output_file", type=str, default=None,
                        help="Where to write batch results (prints to stdout if omitted)")
    parser.add_argument("--lenient", action="store_true",
                        help="Skip unknown characters and tolerate unbalanced parentheses")
    parser.add_argument("--log_level", "--log-level", dest="log_level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # 设置日志
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=CLI_CONFIG["log_format"]
    )
    validate_config()

    calculator = Calculator(strict=not args.lenient)
    logger.info(f"Calculator started (strict={not args.lenient})")

    if args.expression is not None:
        return run_single(calculator, args.expression)
    if args.input_file:
        return run_batch(calculator, args.input_file, args.column, args.output_file)
    return run_repl(calculator)


if __name__ == "__main__":
    sys.exit(main())
