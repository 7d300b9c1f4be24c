"""
Port: ExpressionParser
Odpowiedzialność: zamiana tekstu wyrażenia na niemutowalne drzewo ExprAST.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ExprAST:
        """
        Parses the whole input into an expression tree.

        The input is taken as-is: no trimming, no whitespace skipping.
        Raises CalcSyntaxError (with the failing character position) on any
        grammar violation; a partial tree is never returned.
        Raises CalcOverflowError for a literal outside the numeric range and
        DepthLimitError when nesting exceeds the configured limit.
        """
        ...
