"""
Adapter: ASTEvaluator
Implementuje port Evaluator: przejście ExprAST w porządku post-order
z jawnym stosem (bez rekurencji Pythona).

Wartości pośrednie to zwykłe int / float Pythona; typ wyniku wynika z typów
operandów:
  int ⊕ int   → int (int64, obcinające dzielenie)
  pozostałe   → float (promocja int → float przed operacją)

Wyjątki od reguły promocji:
  % : tylko int % int; float → UnsupportedOperandError
  ^ : int ^ int>=0 dokładnie (int_pow), int ^ int<0 → float

Limit zagnieżdżenia liczy tylko krawędzie do prawego operandu i do operandu
negacji. Lewy łańcuch 1+1+...+1 ma zagnieżdżenie 1 niezależnie od długości.

eval_expr(): oblicza wartość i zwraca EvalResult z krokami
"""
from __future__ import annotations

from typing import Callable, Union

from adapters.evaluator.numeric import (
    check_int64,
    float_div,
    float_pow,
    int_pow,
    trunc_div,
    trunc_mod,
)
from contracts import (
    BinOpNode,
    DepthLimitError,
    EvalResult,
    ExprAST,
    NegNode,
    UnsupportedOperandError,
    ValueNode,
    format_number,
    numeric_value,
)

Number = Union[int, float]

DEFAULT_MAX_DEPTH = 500


def _unsupported_float_mod(a: float, b: float) -> float:
    raise UnsupportedOperandError(
        f"Nie można wykonać % na liczbie zmiennoprzecinkowej: "
        f"{format_number(a)} % {format_number(b)}"
    )


def _int_pow_or_float(a: int, b: int) -> Number:
    if b >= 0:
        return int_pow(a, b)
    return float_pow(float(a), float(b))


# Mapowanie symboli operatorów na operacje int ⊕ int
_INT_OPS: dict[str, Callable[[int, int], Number]] = {
    "+": lambda a, b: check_int64(a + b),
    "-": lambda a, b: check_int64(a - b),
    "*": lambda a, b: check_int64(a * b),
    "/": trunc_div,
    "%": trunc_mod,
    "^": _int_pow_or_float,
}

# ... i na operacje po promocji do float
_FLOAT_OPS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": float_div,
    "%": _unsupported_float_mod,
    "^": float_pow,
}


class ASTEvaluator:
    """Ewaluator wyrażeń arytmetycznych o mieszanej semantyce int64/float."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(self, ast: ExprAST) -> EvalResult:
        steps: list[str] = []
        values: list[Number] = []
        # (węzeł, zagnieżdżenie, czy operandy już są na stosie wartości)
        stack: list[tuple[ExprAST, int, bool]] = [(ast, 0, False)]

        while stack:
            node, nesting, ready = stack.pop()
            if nesting > self._max_depth:
                raise DepthLimitError(
                    f"Przekroczono maksymalne zagnieżdżenie drzewa ({self._max_depth})"
                )

            if isinstance(node, ValueNode):
                values.append(node.value.value)

            elif isinstance(node, NegNode):
                if not ready:
                    stack.append((node, nesting, True))
                    stack.append((node.operand, nesting + 1, False))
                    continue
                val = values.pop()
                result = check_int64(-val) if isinstance(val, int) else -val
                steps.append(f"-({format_number(val)}) = {format_number(result)}")
                values.append(result)

            elif isinstance(node, BinOpNode):
                if not ready:
                    # Lewy operand zdejmowany pierwszy: kolejność kroków od lewej
                    stack.append((node, nesting, True))
                    stack.append((node.right, nesting + 1, False))
                    stack.append((node.left, nesting, False))
                    continue
                right = values.pop()
                left = values.pop()
                result = _apply(node.op, left, right)
                steps.append(
                    f"{format_number(left)} {node.op} {format_number(right)} = {format_number(result)}"
                )
                values.append(result)

            else:
                raise TypeError(f"Nieznany typ węzła AST: {type(node)}")

        return EvalResult(value=numeric_value(values.pop()), steps=steps)


def _apply(op: str, left: Number, right: Number) -> Number:
    if isinstance(left, int) and isinstance(right, int):
        return _INT_OPS[op](left, right)
    return _FLOAT_OPS[op](float(left), float(right))
