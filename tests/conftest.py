# tests/conftest.py
import os

# Settings are read at import time; configure before anything imports them.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ALLOWED_ORIGIN", "http://testserver")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["MAX_DAILY_QUERIES"] = "3"
os.environ["STAGE_SEARCHING_AT"] = "0.05"
os.environ["STAGE_REASONING_AT"] = "0.1"
os.environ["STAGE_FINALIZING_AT"] = "0.15"

import json
from typing import Any, Dict, List

import pytest
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis
from fastapi.testclient import TestClient

from config import cache
from core.entities import GenerationResult

VERIFICATION = {
    "score": 12,
    "verdict": "FAKE",
    "isAiGenerated": True,
    "aiConfidence": 87,
    "aiReasoning": "Lighting on the face is inconsistent.",
    "summary": "Classic advance-fee scam using a fake bank letterhead.",
    "extractedContent": "Your account has been selected to receive 5,000 USD...",
    "claims": [
        {"text": "Bank is sending money", "isFact": False, "assessment": "No such program."},
        {"text": "Bank exists", "isFact": True, "assessment": "The bank is real."},
    ],
}

GROUNDING = [
    {"web": {"uri": "https://a.example/1", "title": "First"}},
    {"retrievedContext": {"uri": "ignored"}},
    {"web": {"uri": "https://b.example/2"}},
    {"web": {"uri": "https://a.example/1", "title": "First (again)"}},
]

STEPS = ["Reading the article", "Cross-checking fraud lists", "Spotting AI traces", "Writing the verdict"]


def analysis_reply(payload: Dict[str, Any] = VERIFICATION) -> GenerationResult:
    text = "Here is the report:\n```json\n" + json.dumps(payload) + "\n```\nStay safe."
    return GenerationResult(text=text, grounding_chunks=list(GROUNDING))


class FakeGemini:
    """
    Stands in for core.gemini_client.generate_content. Replies are chosen by
    the kind of call, recognised from its arguments.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.replies: Dict[str, Any] = {
            "analysis": analysis_reply(),
            "steps": GenerationResult(text=json.dumps(STEPS)),
            "audio": GenerationResult(
                text=json.dumps({"transcript": "hello grandma", "analysis": "Synthetic prosody."})
            ),
            "dictation": GenerationResult(text="  the bank called me  "),
            "chat": GenerationResult(text="It is a scam because the sender domain is spoofed."),
        }

    @staticmethod
    def kind_of(kwargs: Dict[str, Any]) -> str:
        if kwargs.get("use_search"):
            return "analysis"
        if kwargs.get("history") is not None:
            return "chat"
        first = kwargs["parts"][0]
        if kwargs.get("response_json"):
            return "steps" if "text" in first else "audio"
        return "dictation"

    def calls_of(self, kind: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if self.kind_of(c) == kind]

    async def __call__(self, **kwargs: Any) -> GenerationResult:
        self.calls.append(kwargs)
        reply = self.replies[self.kind_of(kwargs)]
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def gemini(monkeypatch) -> FakeGemini:
    fake = FakeGemini()
    for target in (
        "service.analysis_service.generate_content",
        "service.media_service.generate_content",
        "service.chat_service.generate_content",
    ):
        monkeypatch.setattr(target, fake)
    return fake


@pytest.fixture
def redis():
    client = FakeRedis(server=FakeServer())
    cache.set_redis(client)
    yield client
    cache.set_redis(None)


@pytest.fixture
def client(redis, gemini):
    from main import app

    with TestClient(app, headers={"X-Client-Id": "browser-1"}) as c:
        yield c
