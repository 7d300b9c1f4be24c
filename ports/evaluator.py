"""
Port: Evaluator
Odpowiedzialność: deterministyczne liczenie wyrażeń AST (int64 / float).
"""
from typing import Protocol, runtime_checkable

from contracts import EvalResult, ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(self, ast: ExprAST) -> EvalResult:
        """
        Evaluates an arithmetic AST to a numeric result.
        Returns EvalResult with:
          - value: IntValue when every operand on the path stays integer,
            FloatValue as soon as a float takes part (promotion)
          - steps: list of human-readable reduction steps
        Raises UnsupportedOperandError for '%' with a float operand.
        Raises CalcZeroDivisionError for integer division/modulo by zero.
        Raises CalcOverflowError when an integer result leaves int64.
        Raises DepthLimitError when the tree is nested too deeply.
        """
        ...
