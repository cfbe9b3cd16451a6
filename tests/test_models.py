"""
Tests for Message, Transcript and RequestParameters.
"""

import dataclasses

import pytest

from ai_cli.core.models import Message, RequestParameters, Role, Transcript


def test_message_rejects_empty_content():
    with pytest.raises(ValueError):
        Message(role=Role.USER, content="")
    with pytest.raises(ValueError):
        Message(role=Role.USER, content="   \n")


def test_message_is_immutable():
    message = Message(role=Role.USER, content="hi")
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.content = "changed"


def test_message_accepts_role_value():
    message = Message(role="assistant", content="ok")
    assert message.role is Role.ASSISTANT


def test_message_from_dict_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message.from_dict({"role": "tool", "content": "x"})


def test_transcript_payload_roundtrip_keeps_order_and_roles():
    transcript = Transcript()
    transcript.append_user("first")
    transcript.append_assistant("second")
    transcript.append_user("third")
    transcript.append_user("fourth")  # alternation is not enforced

    payload = transcript.to_payload()
    assert payload == [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "second"},
        {"role": "user", "content": "third"},
        {"role": "user", "content": "fourth"},
    ]
    restored = Transcript.from_payload(payload)
    assert restored.messages == transcript.messages


def test_transcript_single_has_one_user_entry():
    transcript = Transcript.single("hello")
    assert len(transcript) == 1
    assert transcript.last == Message(role=Role.USER, content="hello")


def test_transcript_messages_view_is_a_snapshot():
    transcript = Transcript.single("hello")
    snapshot = transcript.messages
    transcript.append_assistant("hi there")
    assert len(snapshot) == 1
    assert len(transcript) == 2


def test_empty_transcript_has_no_last():
    assert Transcript().last is None
    assert list(Transcript()) == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"model": "", "max_tokens": 10, "temperature": 0.7},
        {"model": "m", "max_tokens": 0, "temperature": 0.7},
        {"model": "m", "max_tokens": -5, "temperature": 0.7},
        {"model": "m", "max_tokens": 10, "temperature": 2.5},
        {"model": "m", "max_tokens": 10, "temperature": -0.1},
    ],
)
def test_request_parameters_validation(kwargs):
    with pytest.raises(ValueError):
        RequestParameters(**kwargs)


def test_request_parameters_with_overrides_skips_none():
    params = RequestParameters(model="gpt-4o-mini", max_tokens=200, temperature=0.7)
    changed = params.with_overrides(model="other", max_tokens=None, temperature=0.0)
    assert changed == RequestParameters(model="other", max_tokens=200, temperature=0.0)
    assert params.model == "gpt-4o-mini"


def test_request_parameters_overrides_are_validated():
    params = RequestParameters(model="gpt-4o-mini", max_tokens=200, temperature=0.7)
    with pytest.raises(ValueError):
        params.with_overrides(max_tokens=0)
