"""
Router: POST /calc, POST /calc/ast

/calc zwraca zawsze 200 z oznaczonym wynikiem (int / float / error);
błędy wyrażenia są częścią kontraktu CalcResult, nie błędem HTTP.
/calc/ast zwraca samo drzewo; błąd parsowania lub za głębokie drzewo → 400.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from adapters.calculator import Calculator
from api.dependencies import get_calculator
from api.schemas import AstResponse, CalcRequest, CalcResponse
from contracts import CalcError, CalcFailure

router = APIRouter(prefix="/calc", tags=["calc"])


@router.post("", response_model=CalcResponse)
def calculate(
    body: CalcRequest,
    calculator: Calculator = Depends(get_calculator),
) -> CalcResponse:
    result = calculator.calc(body.expression)
    return CalcResponse(
        expression=body.expression,
        result=result,
        display=result.display(),
    )


@router.post("/ast", response_model=AstResponse)
def parse_ast(
    body: CalcRequest,
    calculator: Calculator = Depends(get_calculator),
) -> AstResponse:
    try:
        ast = calculator.ast(body.expression)
    except CalcError as exc:
        failure = CalcFailure(kind=exc.kind, message=exc.message, position=exc.position)
        raise HTTPException(status_code=400, detail=failure.model_dump(mode="json"))
    return AstResponse(expression=body.expression, ast=ast)
