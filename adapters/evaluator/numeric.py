"""
Operacje liczbowe dla ASTEvaluator.

Liczby całkowite zachowują się jak int64: każdy wynik spoza zakresu
→ CalcOverflowError. Dzielenie i reszta obcinają w stronę zera (znak reszty
= znak dzielnej). Liczby zmiennoprzecinkowe zachowują się jak IEEE-754 double:
dzielenie przez zero daje ±inf/nan zamiast wyjątku.
"""
from __future__ import annotations

import math

from contracts import INT64_MAX, INT64_MIN, CalcOverflowError, CalcZeroDivisionError


def check_int64(v: int) -> int:
    if not INT64_MIN <= v <= INT64_MAX:
        raise CalcOverflowError(f"Przepełnienie int64: {v}")
    return v


def int_pow(a: int, p: int) -> int:
    """
    a ** p przez potęgowanie przez kwadraty, O(log p) mnożeń.
    Wymaga p >= 0; ujemne wykładniki idą ścieżką float_pow.
    """
    if p < 0:
        raise ValueError(f"int_pow wymaga nieujemnego wykładnika, got {p}")
    if p == 0:
        return 1
    s = 1 if p % 2 == 0 else a
    t = int_pow(a, p // 2)
    return check_int64(check_int64(t * t) * s)


def trunc_div(a: int, b: int) -> int:
    if b == 0:
        raise CalcZeroDivisionError("Dzielenie przez zero")
    q = abs(a) // abs(b)
    return check_int64(q if (a < 0) == (b < 0) else -q)


def trunc_mod(a: int, b: int) -> int:
    if b == 0:
        raise CalcZeroDivisionError("Dzielenie przez zero (reszta)")
    r = abs(a) % abs(b)
    return r if a >= 0 else -r


def float_div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def float_pow(a: float, b: float) -> float:
    """Potęga w semantyce C pow(): zamiast wyjątków ±inf lub nan."""
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf
    except ValueError:
        # math.pow: 0 ** ujemna albo ujemna podstawa ** ułamek
        if a == 0.0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan
