"""
Pytest config to ensure local package imports work without installation.
"""

import sys
from pathlib import Path

import pytest


def _add_repo_root_to_path() -> None:
    """
    Insert the repo root into sys.path for local imports.
    """
    repo_root = Path(__file__).resolve().parent.parent
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_add_repo_root_to_path()

from ai_cli.config import AppConfig  # noqa: E402


class StubClient:
    """
    Test-only stand-in for LanguageModelClient.

    Each queued item is either a reply (str or None) or an exception to raise.
    Every call records a snapshot of the messages it received.
    """

    def __init__(self, responses=None) -> None:
        self.responses = list(responses or [])
        self.calls = []

    def complete(self, messages, params):
        self.calls.append((tuple(messages), params))
        if not self.responses:
            raise RuntimeError("No response queued")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(api_key="sk-test")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    # No .env from the developer's checkout may leak into tests
    monkeypatch.setattr("ai_cli.config.load_dotenv", lambda *args, **kwargs: False)
    for name in (
        "AI_API_KEY",
        "AI_MODEL",
        "AI_API_BASE_URL",
        "AI_TIMEOUT_MS",
        "AI_LOG_LEVEL",
        "AI_LOG_FILE",
        "AI_HISTORY_WARN_MESSAGES",
    ):
        monkeypatch.delenv(name, raising=False)
