import pytest

from triagekit.events import (
    EventName,
    HandlerFailure,
    HandlerMessage,
    PayloadError,
    command_parse_failure_message,
    deserialize_payload,
    feature_disabled_message,
    parse_event_name,
    summarize_errors,
)

WIRE_NAMES = [
    "pull_request_review",
    "pull_request_review_comment",
    "issue_comment",
    "pull_request",
    "issues",
    "push",
    "create",
]


@pytest.mark.parametrize("name", WIRE_NAMES)
def test_event_name_round_trip(name):
    assert str(parse_event_name(name)) == name


def test_issues_maps_to_issue():
    assert parse_event_name("issues") is EventName.ISSUE


@pytest.mark.parametrize("name", ["", "release", "Issues", "star"])
def test_unknown_event_is_other(name):
    event = parse_event_name(name)
    assert event is EventName.OTHER
    assert str(event) == "other"


def test_deserialize_valid_payload():
    data = deserialize_payload('{"action": "opened", "number": 12}')
    assert data == {"action": "opened", "number": 12}


def test_deserialize_bytes_payload():
    assert deserialize_payload(b'[1, 2]') == [1, 2]


def test_deserialize_invalid_payload_reports_position():
    with pytest.raises(PayloadError) as info:
        deserialize_payload('{"action":\n oops}')
    assert info.value.lineno == 2
    assert "line 2" in str(info.value)


def test_payload_error_is_value_error():
    with pytest.raises(ValueError):
        deserialize_payload("")


def test_feature_disabled_message():
    msg = feature_disabled_message("assign")
    assert msg == (
        "The feature `assign` is not enabled in this repository.\n"
        "To enable it add its section in the `triagebot.toml` "
        "in the root of the repository."
    )


def test_command_parse_failure_message():
    msg = command_parse_failure_message("relabel", "https://example.com/c/1", "bad label")
    assert msg == "Parsing relabel command in [comment](https://example.com/c/1) failed: bad label"


def test_handler_message_str():
    assert str(HandlerMessage("nope")) == "nope"


def test_handler_failure_hides_details():
    err = HandlerFailure(RuntimeError("database down"))
    assert str(err) == "An internal error occurred."
    assert isinstance(err.error, RuntimeError)


def test_summarize_joins_messages():
    message, failed = summarize_errors([HandlerMessage("first"), HandlerMessage("second")])
    assert message == "first\n\nsecond"
    assert failed is False


def test_summarize_flags_failures_and_excludes_them():
    message, failed = summarize_errors(
        [HandlerFailure(RuntimeError("x")), HandlerMessage("only")]
    )
    assert message == "only"
    assert failed is True


def test_summarize_empty():
    assert summarize_errors([]) == ("", False)