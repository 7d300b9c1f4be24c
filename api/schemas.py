"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from contracts import CalcResult, ExprAST


# ─────────────────────────── /calc ───────────────────────────────

class CalcRequest(BaseModel):
    # Bez strip(): wyrażenie przekazywane dosłownie
    expression: str = Field(..., max_length=10_000)


class CalcResponse(BaseModel):
    expression: str
    result: CalcResult
    display: Optional[str] = None   # tekst wyniku jak w CLI; None dla błędu


# ─────────────────────────── /calc/ast ───────────────────────────

class AstResponse(BaseModel):
    expression: str
    ast: ExprAST


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
