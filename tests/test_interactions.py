import pytest

from triagekit.interactions import (
    END_BOT,
    START_BOT,
    EditIssueBody,
    error_comment_body,
    normalize_body,
    ping_comment_body,
)


def test_normalize_body():
    assert normalize_body("a\r\nb\r\n") == "a\nb\n"
    assert normalize_body("a\nb") == "a\nb"


def test_error_comment_body():
    body = error_comment_body("Cannot release unassigned issue")
    assert body.startswith("**Error**: Cannot release unassigned issue\n\n")
    assert body.endswith("\n")


def test_ping_comment_body():
    assert ping_comment_body(["alice", "bob"]) == "@alice @bob "
    assert ping_comment_body([]) == ""


def test_no_section_yet():
    edit = EditIssueBody("Original text", "ASSIGN")
    assert edit.current() is None
    assert edit.current_data() is None


def test_apply_to_fresh_body_round_trips():
    new_body = EditIssueBody("Original text", "ASSIGN").apply("", {"user": "alice"})
    assert new_body.startswith("Original text\n\n" + START_BOT)
    assert new_body.endswith(END_BOT)
    assert "<!-- TRIAGEBOT_ASSIGN_START -->\n" in new_body
    assert "$$TRIAGEBOT_ASSIGN_DATA_END -->\n" in new_body
    assert EditIssueBody(new_body, "ASSIGN").current_data() == {"user": "alice"}


def test_apply_replaces_existing_section():
    first = EditIssueBody("Body", "ASSIGN").apply("one", {"user": "alice"})
    second = EditIssueBody(first, "ASSIGN").apply("two", {"user": None})
    edit = EditIssueBody(second, "ASSIGN")
    assert edit.current_data() == {"user": None}
    assert "one" not in edit.current()
    assert "two" in edit.current()
    assert second.count("<!-- TRIAGEBOT_ASSIGN_START -->") == 1
    assert second.startswith("Body")


def test_sections_with_different_ids_coexist():
    body = EditIssueBody("Body", "ASSIGN").apply("", {"user": "alice"})
    body = EditIssueBody(body, "SUMMARY").apply("notes", {"entries_by_url": {}})
    assert body.count(START_BOT) == 1
    assert body.endswith(END_BOT)
    assert EditIssueBody(body, "ASSIGN").current_data() == {"user": "alice"}
    assert EditIssueBody(body, "SUMMARY").current_data() == {"entries_by_url": {}}
    assert body.index("TRIAGEBOT_ASSIGN_START") < body.index("TRIAGEBOT_SUMMARY_START")


def test_apply_normalizes_line_endings():
    body = EditIssueBody("line one\r\nline two", "ASSIGN").apply("", [1, 2])
    assert "\r\n" not in body
    assert EditIssueBody(body, "ASSIGN").current_data() == [1, 2]


def test_current_contains_markers_and_text():
    body = EditIssueBody("x", "NOTE").apply("hello", {})
    section = EditIssueBody(body, "NOTE").current()
    assert section.startswith("<!-- TRIAGEBOT_NOTE_START -->\n")
    assert section.endswith("\n<!-- TRIAGEBOT_NOTE_END -->\n")
    assert "hello" in section


def test_corrupt_data_raises():
    body = EditIssueBody("x", "NOTE").apply("", {"a": 1})
    broken = body.replace('{"a":1}', "{not json")
    with pytest.raises(ValueError, match="deserializing data"):
        EditIssueBody(broken, "NOTE").current_data()