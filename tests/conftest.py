from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, List, Tuple

import pytest
from fastapi.testclient import TestClient

from codetutor.api import deps
from codetutor.core.config import settings
from codetutor.main import app
from codetutor.services import storage as storage_module
from codetutor.services.credentials import CredentialStore
from codetutor.services.gemini_service import GeminiQuestionGenerator
from codetutor.services.question_resolver import QuestionResolver
from codetutor.services.storage import KeyValueStore

VALID_REPLY = """Here are your questions:
```json
[
  {
    "id": 7,
    "question": "Which tag creates a hyperlink?",
    "options": ["<a>", "<link>", "<href>", "<url>"],
    "correctAnswer": 0,
    "explanation": "The <a> element defines a hyperlink.",
    "category": "theory"
  },
  {
    "id": 7,
    "question": "Which attribute sets an image source?",
    "options": ["href", "src", "alt", "link"],
    "correctAnswer": 1,
    "explanation": "src points to the image file.",
    "category": "advanced"
  }
]
```"""


class FakeGemini(GeminiQuestionGenerator):
    """Generator whose SDK call is scripted instead of hitting the network."""

    def __init__(self, outcome: Any = VALID_REPLY):
        super().__init__(model_name="fake-model", timeout=0)
        self.outcome = outcome
        self.calls: List[Tuple[str, str]] = []

    def _generate_sync(self, api_key: str, prompt: str) -> Any:
        self.calls.append((api_key, prompt))
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        if callable(self.outcome):
            return self.outcome()
        return SimpleNamespace(text=self.outcome)


@pytest.fixture(autouse=True)
def _no_delays(monkeypatch):
    monkeypatch.setattr(settings, "FALLBACK_DELAY_SECONDS", 0)
    monkeypatch.setattr(settings, "TUTOR_REPLY_DELAY_SECONDS", 0)


@pytest.fixture
def store(tmp_path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "storage.json")


@pytest.fixture
def credentials(store) -> CredentialStore:
    return CredentialStore(store)


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def resolver(credentials, fake_gemini) -> QuestionResolver:
    return QuestionResolver(credentials, fake_gemini)


@pytest.fixture
def client(store, fake_gemini, monkeypatch):
    monkeypatch.setattr(storage_module, "_default_store", None)
    app.dependency_overrides[storage_module.get_store] = lambda: store
    app.dependency_overrides[deps.get_generator] = lambda: fake_gemini
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def run_gemini(fake_gemini) -> Callable[[Any], FakeGemini]:
    def _set(outcome: Any) -> FakeGemini:
        fake_gemini.outcome = outcome
        return fake_gemini

    return _set
