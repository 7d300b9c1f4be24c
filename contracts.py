"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w ProveCalc.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

CONTRACTS_VERSION = "1.0.0"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ─────────────────────────── Wartości liczbowe ───────────────────────────

class IntValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["int"] = "int"
    value: int

    @field_validator("value")
    @classmethod
    def _check_int64(cls, v: int) -> int:
        if not INT64_MIN <= v <= INT64_MAX:
            raise ValueError(f"Wartość poza zakresem int64: {v}")
        return v


class FloatValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["float"] = "float"
    value: float


NumericValue = Annotated[Union[IntValue, FloatValue], Field(discriminator="kind")]


def numeric_value(raw: int | float) -> NumericValue:
    """Opakowuje surową liczbę Pythona w odpowiedni wariant NumericValue."""
    if isinstance(raw, int):
        return IntValue(value=raw)
    return FloatValue(value=raw)


def format_number(raw: int | float) -> str:
    """int → goły literał, float → repr (np. 3.3333333333333335, inf, nan)."""
    if isinstance(raw, int):
        return str(raw)
    return repr(raw)


# ─────────────────────────── AST wyrażenia ───────────────────────────────

class ValueNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["value"] = "value"
    value: NumericValue


class BinOpNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["binop"] = "binop"
    op: Literal["+", "-", "*", "/", "%", "^"]
    left: "ExprAST"
    right: "ExprAST"


class NegNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["neg"] = "neg"
    operand: "ExprAST"


# Dyskryminator node_type: serializacja nie próbuje kolejnych wariantów unii
ExprAST = Annotated[Union[ValueNode, BinOpNode, NegNode], Field(discriminator="node_type")]
BinOpNode.model_rebuild()
NegNode.model_rebuild()


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: NumericValue
    steps: list[str] = Field(default_factory=list)  # czytelne kroki


# ─────────────────────────── Błędy ───────────────────────────────────────

class ErrorKind(str, Enum):
    SYNTAX = "syntax_error"
    UNSUPPORTED_OPERAND = "unsupported_operand"   # % na float
    DIVISION_BY_ZERO = "division_by_zero"
    OVERFLOW = "overflow"                         # wynik/literał poza int64
    DEPTH_LIMIT = "depth_limit"


class CalcError(Exception):
    """Bazowy błąd parsowania lub ewaluacji."""

    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


class CalcSyntaxError(CalcError):
    kind = ErrorKind.SYNTAX


class UnsupportedOperandError(CalcError):
    kind = ErrorKind.UNSUPPORTED_OPERAND


class CalcZeroDivisionError(CalcError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class CalcOverflowError(CalcError, OverflowError):
    kind = ErrorKind.OVERFLOW


class DepthLimitError(CalcError):
    kind = ErrorKind.DEPTH_LIMIT


# ─────────────────────────── Wynik kalkulatora ───────────────────────────

class ResultType(str, Enum):
    INT = "int"
    FLOAT = "float"
    ERROR = "error"


class CalcFailure(BaseModel):
    kind: ErrorKind
    message: str
    position: Optional[int] = None   # indeks znaku, jeśli znany


class CalcResult(BaseModel):
    type: ResultType
    value: Optional[Union[int, float]] = None
    error: Optional[CalcFailure] = None
    steps: list[str] = Field(default_factory=list)

    @field_serializer("value")
    def _serialize_value(self, v, info):
        # JSON nie ma inf/nan: w trybie json tekst "inf" / "-inf" / "nan"
        if isinstance(v, float) and not math.isfinite(v) and info.mode_is_json():
            return format_number(v)
        return v

    @classmethod
    def success(cls, result: EvalResult) -> CalcResult:
        num = result.value
        rtype = ResultType.INT if isinstance(num, IntValue) else ResultType.FLOAT
        return cls(type=rtype, value=num.value, steps=result.steps)

    @classmethod
    def failure(cls, exc: CalcError) -> CalcResult:
        return cls(
            type=ResultType.ERROR,
            error=CalcFailure(kind=exc.kind, message=exc.message, position=exc.position),
        )

    @property
    def is_error(self) -> bool:
        return self.type == ResultType.ERROR

    def int_result(self) -> int:
        if self.type != ResultType.INT:
            raise ValueError(f"Wynik nie jest typu int: {self.type.value}")
        return int(self.value)  # type: ignore[arg-type]

    def double_result(self) -> float:
        if self.type != ResultType.FLOAT:
            raise ValueError(f"Wynik nie jest typu float: {self.type.value}")
        return float(self.value)  # type: ignore[arg-type]

    def display(self) -> str | None:
        """Tekst wyniku tak, jak drukuje go CLI; None dla błędu."""
        if self.is_error:
            return None
        return format_number(self.value)  # type: ignore[arg-type]
