from __future__ import annotations

import base64
import json

from backend.lambda_handler import RESPONSE_HEADERS, handler


def proxy_event(body, *, encoded: bool = False) -> dict:
    return {"httpMethod": "POST", "path": "/calculate", "body": body, "isBase64Encoded": encoded}


def test_handler_computes_result():
    body = json.dumps({"principal": 1000, "rate": 5, "years": 10, "frequency": 12})

    resp = handler(proxy_event(body))

    assert resp["statusCode"] == 200
    assert resp["headers"] == RESPONSE_HEADERS
    assert json.loads(resp["body"])["result"] == 1647.01


def test_handler_decodes_base64_bodies():
    body = json.dumps({"principal": 100, "rate": 0, "years": 5, "frequency": 1})
    encoded = base64.b64encode(body.encode()).decode()

    resp = handler(proxy_event(encoded, encoded=True))

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"])["result"] == 100


def test_handler_rejects_missing_body():
    resp = handler(proxy_event(None))

    assert resp["statusCode"] == 400
    assert json.loads(resp["body"]) == {"error": "Missing request body"}


def test_handler_reports_validation_failure():
    body = json.dumps({"principal": 100, "rate": 5, "years": 1, "frequency": 7})

    resp = handler(proxy_event(body))

    assert resp["statusCode"] == 400
    assert json.loads(resp["body"]) == {"error": "Frequency must be 1, 2, 4, 12, or 365"}


def test_handler_hides_parse_failures():
    resp = handler(proxy_event("{not json"))

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "Calculation failed"}
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"


def test_handler_hides_bad_base64():
    resp = handler(proxy_event("%%%", encoded=True))

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "Calculation failed"}
