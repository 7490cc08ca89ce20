"""Shared fixtures: a recording stand-in for the AI provider."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from neuralpay_gateway.core.routing import TaskRouter


class FakeProvider:
    """Provider double that records calls and returns canned answers."""

    def __init__(
        self,
        text: str = "Hallo",
        image_parts: list[dict[str, Any]] | None = None,
        json_text: str = "{}",
        error: Exception | None = None,
    ):
        self.text = text
        self.image_parts = image_parts if image_parts is not None else []
        self.json_text = json_text
        self.error = error
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error

    async def send_chat(self, history, message, system_instruction=None):
        self._record("send_chat", history, message, system_instruction)
        return self.text

    async def generate_image(self, parts):
        self._record("generate_image", parts)
        return self.image_parts

    async def generate_json(self, prompt, schema):
        self._record("generate_json", prompt, schema)
        return self.json_text

    async def generate_text(self, parts):
        self._record("generate_text", parts)
        return self.text


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def router(provider):
    return TaskRouter(provider)


@pytest.fixture
def test_settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, log_level="WARNING")


@pytest.fixture
def client(provider, test_settings):
    """TestClient over an app wired to the fake provider."""
    return TestClient(create_app(provider=provider, settings=test_settings))
