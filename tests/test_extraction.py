import json

import pytest
import requests

from attendance_pro.extraction import ExtractionResponse, GeminiGateway, create_gateway
from attendance_pro.extraction.prompts import NO_RULES_TEXT, build_system_prompt, render_rules
from attendance_pro.utils.exceptions import GatewayConfigurationError, GatewayResponseError

FALLBACK = "Failed to parse the provided information. Please check the format."


class FakeHttpResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHttpSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def model_answer(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


# ---------------------------------------------------------------------------
# ExtractionResponse
# ---------------------------------------------------------------------------

def test_from_json_parses_records_and_uncertainties():
    response = ExtractionResponse.from_json(
        '{"records": [{"labourName": "Ravi", "otHours": 2}], "uncertainties": ["Which site?"]}'
    )
    assert response.records == [{"labourName": "Ravi", "otHours": 2}]
    assert response.uncertainties == ["Which site?"]
    assert response.has_uncertainties


def test_from_json_tolerates_code_fences():
    response = ExtractionResponse.from_json('```json\n{"records": []}\n```')
    assert response.records == []
    assert response.uncertainties == []


def test_from_payload_drops_non_object_records():
    response = ExtractionResponse.from_payload({"records": [{"day": 1}, "junk", 3]})
    assert response.records == [{"day": 1}]


@pytest.mark.parametrize("text", ["", "not json", "[1, 2]", '{"uncertainties": []}', '{"records": "x"}'])
def test_malformed_payloads_raise(text):
    with pytest.raises(GatewayResponseError):
        ExtractionResponse.from_json(text)


def test_fallback_uses_configured_message():
    response = ExtractionResponse.fallback()
    assert response.records == []
    assert response.uncertainties == [FALLBACK]
    assert response.is_fallback


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

def test_render_rules():
    rules = [
        {"pattern": "HD", "explanation": "half day"},
        {"pattern": "Is Ravi's rate 800 or 850?", "explanation": "Always 800"},
    ]
    assert render_rules(rules) == (
        "Rule: HD -> Interpretation: half day\n"
        "Rule: Is Ravi's rate 800 or 850? -> Interpretation: Always 800"
    )


def test_system_prompt_without_rules():
    prompt = build_system_prompt([])
    assert NO_RULES_TEXT in prompt
    assert "OT Amount = (Base Salary / 8) * OT Hours." in prompt


# ---------------------------------------------------------------------------
# GeminiGateway
# ---------------------------------------------------------------------------

def test_gateway_requires_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(GatewayConfigurationError):
        GeminiGateway()


def test_gateway_reads_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    assert GeminiGateway().api_key == "env-key"


def test_create_gateway_rejects_unknown_provider():
    with pytest.raises(GatewayConfigurationError):
        create_gateway("carrier-pigeon")


def test_build_request_includes_rules_text_and_images():
    gateway = GeminiGateway(api_key="test-key", session=FakeHttpSession())
    body = gateway.build_request(
        "Ravi full day",
        ["data:image/png;base64,AAAA", "BBBB"],
        [{"pattern": "HD", "explanation": "half day"}]
    )

    parts = body["contents"][0]["parts"]
    assert parts[0]["text"] == "Process the following content:\n\nTEXT:\nRavi full day"
    assert parts[1]["inlineData"] == {"mimeType": "image/png", "data": "AAAA"}
    assert parts[2]["inlineData"]["data"] == "BBBB"
    assert "Rule: HD -> Interpretation: half day" in body["systemInstruction"]["parts"][0]["text"]
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert body["generationConfig"]["responseSchema"]["required"] == ["records", "uncertainties"]


def test_extract_success():
    answer = model_answer(json.dumps({
        "records": [{"date": "2024-01-01", "labourName": "Ravi", "siteName": "Site A",
                     "baseSalary": 800, "day": 1, "otHours": 2}],
        "uncertainties": []
    }))
    http = FakeHttpSession(FakeHttpResponse(200, answer))
    gateway = GeminiGateway(api_key="test-key", model_name="test-model", session=http)

    response = gateway.extract("Ravi", [], [])

    assert response.records[0]["labourName"] == "Ravi"
    assert response.model_name == "test-model"
    assert not response.is_fallback
    assert http.requests[0]["url"].endswith("/models/test-model:generateContent")
    assert http.requests[0]["headers"]["x-goog-api-key"] == "test-key"


@pytest.mark.parametrize("http", [
    FakeHttpSession(error=requests.ConnectionError("offline")),
    FakeHttpSession(FakeHttpResponse(500, None, text="internal error")),
    FakeHttpSession(FakeHttpResponse(200, None, text="<html>")),
    FakeHttpSession(FakeHttpResponse(200, {"candidates": []})),
    FakeHttpSession(FakeHttpResponse(200, model_answer("this is not json"))),
])
def test_extract_failures_return_fallback(http):
    gateway = GeminiGateway(api_key="test-key", session=http)

    response = gateway.extract("Ravi", [], [])

    assert response.is_fallback
    assert response.records == []
    assert response.uncertainties == [FALLBACK]


def test_blank_uncertainties_are_kept():
    response = ExtractionResponse.from_payload({"records": [], "uncertainties": ["", None, "Site?"]})
    assert response.uncertainties == ["", "", "Site?"]
    assert response.has_uncertainties
