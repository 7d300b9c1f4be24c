"""
Adapter: Calculator
Fasada łącząca ExpressionParser i Evaluator w jedno wywołanie calc().

calc() nigdy nie rzuca CalcError; każdy błąd (składni, ewaluacji) trafia do
zwracanego CalcResult z type=ERROR i odpowiednim ErrorKind.

ast() zwraca samo drzewo do wypisania jako JSON; drzewo głębsze niż
max_ast_depth → DepthLimitError.
"""
from __future__ import annotations

import logging

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.expression_parser.recursive_descent_parser import RecursiveDescentParser
from config import Settings
from contracts import BinOpNode, CalcError, CalcResult, DepthLimitError, ExprAST, NegNode
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser

logger = logging.getLogger("prove_calc.calculator")

DEFAULT_MAX_AST_DEPTH = 200


def tree_depth(ast: ExprAST) -> int:
    """Liczba węzłów na najdłuższej ścieżce od korzenia (liść = 1)."""
    deepest = 0
    stack: list[tuple[ExprAST, int]] = [(ast, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, BinOpNode):
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
        elif isinstance(node, NegNode):
            stack.append((node.operand, depth + 1))
    return deepest


class Calculator:
    """Tekst wyrażenia → CalcResult. Bezstanowy, można współdzielić."""

    def __init__(
        self,
        parser: ExpressionParser | None = None,
        evaluator: Evaluator | None = None,
        max_ast_depth: int = DEFAULT_MAX_AST_DEPTH,
    ) -> None:
        self._parser = parser or RecursiveDescentParser()
        self._evaluator = evaluator or ASTEvaluator()
        self._max_ast_depth = max_ast_depth

    @classmethod
    def from_settings(cls, settings: Settings) -> Calculator:
        return cls(
            parser=RecursiveDescentParser(max_depth=settings.max_nesting),
            evaluator=ASTEvaluator(max_depth=settings.max_tree_depth),
            max_ast_depth=settings.max_ast_depth,
        )

    def parse(self, text: str) -> ExprAST:
        """Tylko parsowanie; rzuca CalcError."""
        try:
            return self._parser.parse(text)
        except RecursionError as exc:
            raise DepthLimitError("Wyrażenie zagnieżdżone zbyt głęboko") from exc

    def ast(self, text: str) -> ExprAST:
        """Parsowanie + limit głębokości drzewa do serializacji; rzuca CalcError."""
        ast = self.parse(text)
        depth = tree_depth(ast)
        if depth > self._max_ast_depth:
            raise DepthLimitError(
                f"Drzewo za głębokie do wypisania ({depth} > {self._max_ast_depth})"
            )
        return ast

    def calc(self, text: str) -> CalcResult:
        try:
            ast = self.parse(text)
            result = self._evaluator.eval_expr(ast)
        except CalcError as exc:
            logger.debug("calc(%r) failed: %s: %s", text, exc.kind.value, exc.message)
            return CalcResult.failure(exc)

        logger.debug("calc(%r) = %r", text, result.value.value)
        return CalcResult.success(result)


_DEFAULT = Calculator()


def calc(text: str) -> CalcResult:
    """Oblicza wyrażenie domyślnym kalkulatorem."""
    return _DEFAULT.calc(text)
