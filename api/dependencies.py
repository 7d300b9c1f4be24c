"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni adapter przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.calculator import Calculator


def get_calculator(request: Request) -> Calculator:
    return request.app.state.calculator
