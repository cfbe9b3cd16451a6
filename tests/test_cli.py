"""
Tests for the CLI entry point: input collection, exit codes and the chat loop.
"""

import io
import logging

import pytest

from ai_cli import cli
from ai_cli.core.engine import AssistantEngine
from ai_cli.core.errors import MalformedResponseError, RemoteError, TransportFailure
from conftest import StubClient


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def _run(argv, responses, monkeypatch, stdin_text=""):
    monkeypatch.setenv("AI_API_KEY", "sk-test")
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin_text))
    client = StubClient(responses=responses)
    code = cli.main(argv, engine_factory=lambda config: AssistantEngine(config, client=client))
    return code, client


def test_missing_credential_exits_before_network(monkeypatch, capsys):
    created = []
    code = cli.main(["chat"], engine_factory=lambda config: created.append(config))
    assert code == cli.EXIT_CONFIG_ERROR
    assert created == []
    assert "AI_API_KEY" in capsys.readouterr().err


def test_ask_prints_framed_reply(monkeypatch, capsys):
    code, client = _run(["ask", "What is 2+2?"], ["4"], monkeypatch)
    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert out.splitlines() == [cli.BANNER_TOP, "4", cli.BANNER_BOTTOM]
    assert client.calls[0][0][0].content == "What is 2+2?"


def test_summarize_reads_stdin(monkeypatch, capsys):
    code, client = _run(["summarize"], ["short"], monkeypatch, stdin_text="The quick brown fox.\n")
    assert code == cli.EXIT_OK
    assert client.calls[0][0][0].content == (
        "Summarize the following text briefly:\n\nThe quick brown fox."
    )


def test_translate_target_and_model(monkeypatch):
    code, client = _run(["translate", "Hello", "--to", "fr", "-m", "gpt-4o"], ["Bonjour"], monkeypatch)
    messages, params = client.calls[0]
    assert code == cli.EXIT_OK
    assert messages[0].content == "Translate the following text into fr:\n\nHello"
    assert params.model == "gpt-4o"


def test_empty_reply_shows_notice(monkeypatch, capsys):
    code, _ = _run(["ask", "hi"], [None], monkeypatch)
    assert code == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == cli.NO_REPLY_NOTICE


@pytest.mark.parametrize(
    "error",
    [
        TransportFailure("connection refused"),
        RemoteError(401, "invalid_api_key"),
        MalformedResponseError("bad json"),
    ],
)
def test_one_shot_errors_exit_nonzero(monkeypatch, capsys, error):
    code, _ = _run(["summarize", "text"], [error], monkeypatch)
    assert code == cli.EXIT_REQUEST_ERROR
    assert str(error) in capsys.readouterr().err


def test_empty_input_is_rejected(monkeypatch, capsys):
    code, client = _run(["ask"], [], monkeypatch, stdin_text="  \n")
    assert code == cli.EXIT_CONFIG_ERROR
    assert client.calls == []


def test_invalid_parameters_are_rejected(monkeypatch):
    code, client = _run(["ask", "hi", "-n", "0"], [], monkeypatch)
    assert code == cli.EXIT_CONFIG_ERROR
    assert client.calls == []


def test_chat_exit_without_network(monkeypatch, capsys):
    code, client = _run(["chat"], [], monkeypatch, stdin_text="EXIT\n")
    assert code == cli.EXIT_OK
    assert client.calls == []
    assert cli.CHAT_BANNER in capsys.readouterr().out


def test_chat_continues_after_error(monkeypatch, capsys):
    code, client = _run(
        ["chat"],
        [RemoteError(401, "invalid_api_key"), "Hi there"],
        monkeypatch,
        stdin_text="hello\n\nhello again\nexit\n",
    )
    captured = capsys.readouterr()
    assert code == cli.EXIT_OK
    assert len(client.calls) == 2
    assert "401 - invalid_api_key" in captured.err
    assert "AI: Hi there" in captured.out
    # The failed turn's user message is still part of the replayed history
    assert [m.content for m in client.calls[1][0]] == ["hello", "hello again"]


def test_chat_ends_on_eof(monkeypatch):
    code, client = _run(["chat"], ["one"], monkeypatch, stdin_text="only line\n")
    assert code == cli.EXIT_OK
    assert len(client.calls) == 1


def test_chat_blank_lines_are_not_sent(monkeypatch, capsys):
    code, client = _run(["chat"], ["pong"], monkeypatch, stdin_text="\n   \nping\nexit\n")
    assert code == cli.EXIT_OK
    assert len(client.calls) == 1
    assert [m.content for m in client.calls[0][0]] == ["ping"]


def test_non_numeric_timeout_exits_with_config_error(monkeypatch, capsys):
    monkeypatch.setenv("AI_TIMEOUT_MS", "abc")
    code, client = _run(["ask", "hi"], [], monkeypatch)
    assert code == cli.EXIT_CONFIG_ERROR
    assert client.calls == []
    assert "AI_TIMEOUT_MS" in capsys.readouterr().err
