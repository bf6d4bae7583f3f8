"""Shared fixtures: in-memory MongoDB, ASGI client and a scriptable Gemini model."""

import os

os.environ["ENV"] = "testing"
os.environ["GEMINI_API_KEY"] = ""
os.environ["UNSPLASH_ACCESS_KEY"] = ""
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"
os.environ["SHOPPING_CATEGORY_TABLE"] = "generic"

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from database import Database
from main import app
from app.middleware.rate_limit import ai_rate_limiter, ai_review_rate_limiter
from app.services.gemini import gemini_service


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """
    Stand-in for the Gemini model wrapper.

    Replies are served in order (the last one repeats); ``error`` is raised
    instead when set.
    """

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []
        self.chats = []

    def _next(self):
        if self.error:
            raise self.error
        if len(self.replies) > 1:
            return FakeResponse(self.replies.pop(0))
        return FakeResponse(self.replies[0] if self.replies else "")

    def generate_content(self, contents):
        self.prompts.append(contents)
        return self._next()

    def send_chat(self, system_instruction, history, message):
        self.chats.append({"system": system_instruction, "history": history, "message": message})
        return self._next()


class FakeService:
    """Async service double for unit tests that bypass ``gemini_service``."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def fake_gemini(monkeypatch):
    """Install a FakeModel on the shared Gemini service; returns a factory."""

    def install(replies=None, error=None):
        model = FakeModel(replies=replies, error=error)
        monkeypatch.setattr(gemini_service, "text_model", model)
        return model

    return install


@pytest.fixture(autouse=True)
def reset_rate_limits():
    ai_rate_limiter.reset()
    ai_review_rate_limiter.reset()
    yield
    ai_rate_limiter.reset()
    ai_review_rate_limiter.reset()


@pytest.fixture
async def db():
    client = AsyncMongoMockClient()
    database = client["fittrack_test"]
    await Database.init_models(database)
    yield database
    Database._initialized = False


@pytest.fixture
async def client(db):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake_service():
    """Factory for FakeService instances."""
    return FakeService
