from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from aria_server.config import Settings
from aria_server.main import create_app


class FakeCompletionClient:
	def __init__(self, reply: str = "Kia ora! Flights to Queenstown start around NZ$129.", error: Optional[Exception] = None) -> None:
		self.reply = reply
		self.error = error
		self.calls: List[List[Dict[str, str]]] = []
		self.closed = False

	async def complete(self, messages: List[Dict[str, str]]) -> str:
		self.calls.append(messages)
		if self.error is not None:
			raise self.error
		return self.reply

	async def aclose(self) -> None:
		self.closed = True


@pytest.fixture
def static_dir(tmp_path):
	d = tmp_path / "public"
	d.mkdir()
	return d


@pytest.fixture
def make_settings(tmp_path, static_dir):
	def _make(**overrides) -> Settings:
		values = {
			"OPENAI_API_KEY": "sk-test",
			"STATIC_DIR": static_dir,
			"ROOT_INDEX": tmp_path / "index.html",
		}
		values.update(overrides)
		return Settings(**values)
	return _make


@pytest.fixture
def fake_llm():
	return FakeCompletionClient()


@pytest.fixture
def app(make_settings, fake_llm):
	return create_app(settings=make_settings(), completion_client=fake_llm)


@pytest.fixture
def client(app):
	return TestClient(app)


@pytest.fixture
def store(app):
	return app.state.conversation_store


@pytest.fixture
def llm_factory():
	return FakeCompletionClient
