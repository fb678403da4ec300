"""Integration test fixtures.

The Gemini API is replaced with an httpx.MockTransport unless a test is
explicitly marked to run against the live service.
"""

import json
import re
from typing import Callable

import httpx
import pytest

MODEL_PATH = re.compile(r"/v1beta/models/(?P<model>[^:]+):generateContent$")


def gemini_envelope(text: str) -> dict:
    """generateContent response wrapping the given text."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 400, "candidatesTokenCount": 30},
    }


class FakeGemini:
    """Scripted Gemini backend recording which models were called.
    
    responses maps a model name to a callable returning an httpx.Response;
    models without an entry answer 404.
    """
    
    def __init__(self):
        self.responses: dict[str, Callable[[], httpx.Response]] = {}
        self.calls: list[str] = []
        self.prompts: list[str] = []
    
    def reply(self, model: str, text: str) -> None:
        self.responses[model] = lambda: httpx.Response(200, json=gemini_envelope(text))
    
    def fail(self, model: str, status_code: int, message: str = "boom", headers: dict | None = None) -> None:
        body = {"error": {"code": status_code, "message": message, "status": "INTERNAL"}}
        self.responses[model] = lambda: httpx.Response(status_code, json=body, headers=headers)
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        match = MODEL_PATH.search(request.url.path)
        if match is None:
            return httpx.Response(404)
        model = match.group("model")
        self.calls.append(model)
        self.prompts.append(json.loads(request.content)["contents"][0]["parts"][0]["text"])
        respond = self.responses.get(model)
        if respond is None:
            return httpx.Response(404, json={"error": {"code": 404, "message": "not found", "status": "NOT_FOUND"}})
        return respond()
    
    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()
