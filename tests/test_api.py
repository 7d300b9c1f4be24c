from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config import Settings


@pytest.fixture
def client():
    with TestClient(create_app(Settings(max_nesting=5))) as c:
        yield c


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "0.1.0"}


def test_calc_returns_integer_result(client):
    response = client.post("/calc", json={"expression": "2+3*4"})

    assert response.status_code == 200
    body = response.json()
    assert body["expression"] == "2+3*4"
    assert body["result"]["type"] == "int"
    assert body["result"]["value"] == 14
    assert body["display"] == "14"


def test_calc_returns_float_result(client):
    body = client.post("/calc", json={"expression": "10.0/3"}).json()

    assert body["result"]["type"] == "float"
    assert body["result"]["value"] == pytest.approx(3.3333333333333335)
    assert body["display"] == "3.3333333333333335"


def test_calc_infinite_result_is_json_safe(client):
    body = client.post("/calc", json={"expression": "1.0/0"}).json()

    assert body["result"]["value"] == "inf"
    assert body["display"] == "inf"


def test_calc_errors_are_tagged_results(client):
    body = client.post("/calc", json={"expression": "7.0%2"}).json()

    assert body["result"]["type"] == "error"
    assert body["result"]["error"]["kind"] == "unsupported_operand"
    assert body["display"] is None


def test_calc_does_not_trim_expression(client):
    body = client.post("/calc", json={"expression": " 1"}).json()

    assert body["result"]["error"]["kind"] == "syntax_error"
    assert body["result"]["error"]["position"] == 0


def test_calc_uses_settings_limits(client):
    body = client.post("/calc", json={"expression": "((((((1))))))"}).json()

    assert body["result"]["error"]["kind"] == "depth_limit"


def test_ast_returns_tree(client):
    response = client.post("/calc/ast", json={"expression": "-2^2"})

    assert response.status_code == 200
    ast = response.json()["ast"]
    assert ast["node_type"] == "binop"
    assert ast["op"] == "^"
    assert ast["left"] == {
        "node_type": "neg",
        "operand": {"node_type": "value", "value": {"kind": "int", "value": 2}},
    }


def test_ast_syntax_error_is_400(client):
    response = client.post("/calc/ast", json={"expression": "(1+2"})

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "syntax_error"
    assert response.json()["detail"]["position"] == 4


def test_calc_long_flat_chain(client):
    body = client.post("/calc", json={"expression": "+".join(["1"] * 1000)}).json()

    assert body["result"]["type"] == "int"
    assert body["result"]["value"] == 1000


def test_ast_too_deep_to_serialize_is_400(client):
    response = client.post("/calc/ast", json={"expression": "+".join(["1"] * 300)})

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "depth_limit"
