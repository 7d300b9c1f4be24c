"""
Adapter: RecursiveDescentParser
Implementuje port ExpressionParser: parser zstępujący działający
bezpośrednio na znakach (bez osobnego tokenizera).

Gramatyka (od najsłabiej do najmocniej wiążących):
  expr           = additive
  additive       = multiplicative (('+'|'-') multiplicative)*
  multiplicative = power (('*'|'/'|'%') power)*
  power          = prefix ('^' prefix)*
  prefix         = ('+'|'-') prefix | primary
  primary        = NUMBER | '(' expr ')'
  NUMBER         = DIGIT+ ('.' DIGIT+)? ('e' DIGIT+)?

Uwagi:
  - '^' jest lewostronnie łączny: 2^3^2 == (2^3)^2.
  - Unarny minus wiąże mocniej niż '^': -2^2 == (-2)^2.
  - Brak pomijania białych znaków: spacja to nieznany znak.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from contracts import (
    INT64_MAX,
    BinOpNode,
    CalcOverflowError,
    CalcSyntaxError,
    DepthLimitError,
    ExprAST,
    FloatValue,
    IntValue,
    NegNode,
    ValueNode,
)

DEFAULT_MAX_DEPTH = 200

# Tylko cyfry ASCII ("٣".isdigit() == True)
_DIGITS = frozenset("0123456789")

# Priorytety operatorów binarnych (additive < multiplicative < power)
_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "%": 2, "^": 3}
_LOWEST_PRECEDENCE = 1

_INT64_DIGITS = len(str(INT64_MAX))


# ──────────────────────────────────────────────────────────────────────────────
# Parser
# ──────────────────────────────────────────────────────────────────────────────

class _Parser:
    def __init__(self, text: str, max_depth: int) -> None:
        self._text = text
        self._pos = 0
        self._depth = 0
        self._max_depth = max_depth

    def _peek(self) -> str | None:
        return self._text[self._pos] if self._pos < len(self._text) else None

    def _consume(self) -> str:
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def _error(self, message: str) -> CalcSyntaxError:
        return CalcSyntaxError(message, position=self._pos)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self._depth >= self._max_depth:
            raise DepthLimitError(
                f"Przekroczono maksymalne zagnieżdżenie ({self._max_depth})",
                position=self._pos,
            )
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def parse(self) -> ExprAST:
        node = self._expr()
        if self._pos < len(self._text):
            raise self._error(f"Nieoczekiwany znak: {self._text[self._pos]!r}")
        return node

    def _expr(self) -> ExprAST:
        return self._binary(_LOWEST_PRECEDENCE)

    def _binary(self, min_prec: int) -> ExprAST:
        """
        additive / multiplicative / power w jednej metodzie (wspinaczka po
        priorytetach). Prawy operand dostaje prec + 1: każdy poziom łączy
        lewostronnie.
        """
        left = self._prefix()
        while True:
            op = self._peek()
            prec = _PRECEDENCE.get(op)  # type: ignore[arg-type]
            if prec is None or prec < min_prec:
                return left
            self._consume()
            right = self._binary(prec + 1)
            left = BinOpNode(op=op, left=left, right=right)  # type: ignore[arg-type]

    def _prefix(self) -> ExprAST:
        ch = self._peek()
        if ch is None:
            raise self._error("Nieoczekiwany koniec wyrażenia")
        if ch == "+":
            self._consume()
            with self._nested():
                return self._prefix()
        if ch == "-":
            self._consume()
            with self._nested():
                operand = self._prefix()
            return NegNode(operand=operand)
        return self._primary()

    def _primary(self) -> ExprAST:
        ch = self._peek()
        if ch is None:
            raise self._error("Nieoczekiwany koniec wyrażenia")
        if ch in _DIGITS:
            return self._number()
        if ch == "(":
            self._consume()
            with self._nested():
                node = self._expr()
            if self._peek() != ")":
                raise self._error("Oczekiwano ')'")
            self._consume()
            return node
        raise self._error(f"Nieoczekiwany znak: {ch!r}")

    def _digits(self) -> None:
        """Konsumuje DIGIT+; błąd składni jeśli brak choć jednej cyfry."""
        if self._peek() not in _DIGITS:
            raise self._error("Oczekiwano cyfry")
        while self._peek() in _DIGITS:
            self._consume()

    def _number(self) -> ValueNode:
        start = self._pos
        is_integer = True

        self._digits()
        if self._peek() == ".":
            is_integer = False
            self._consume()
            self._digits()
        if self._peek() == "e":
            is_integer = False
            self._consume()
            self._digits()

        lexeme = self._text[start:self._pos]
        if is_integer:
            # len() najpierw: int() odrzuca bardzo długie napisy (limit cyfr)
            significant = lexeme.lstrip("0") or "0"
            if len(significant) > _INT64_DIGITS or int(significant) > INT64_MAX:
                raise CalcOverflowError(f"Literał poza zakresem int64: {lexeme}", position=start)
            return ValueNode(value=IntValue(value=int(significant)))

        fvalue = float(lexeme)
        if fvalue == float("inf"):
            raise CalcOverflowError(f"Literał poza zakresem float: {lexeme}", position=start)
        return ValueNode(value=FloatValue(value=fvalue))


# ──────────────────────────────────────────────────────────────────────────────
# Adapter
# ──────────────────────────────────────────────────────────────────────────────

class RecursiveDescentParser:
    """
    Parsuje pojedyncze wyrażenie arytmetyczne do ExprAST.
    Każde naruszenie gramatyki → CalcSyntaxError z pozycją znaku.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._max_depth = max_depth

    # -- ExpressionParser protocol ------------------------------------------

    def parse(self, text: str) -> ExprAST:
        return _Parser(text, self._max_depth).parse()
