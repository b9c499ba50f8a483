import io
import uuid

import pytest

from triagekit.events import EventName
from triagekit.payload import sign
from triagekit.server import WebhookApp, main

SECRET = "secret"


def call(app, method="GET", path="/", headers=None, body=b""):
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "CONTENT_LENGTH": str(len(body)),
        "wsgi.input": io.BytesIO(body),
    }
    for name, value in (headers or {}).items():
        environ["HTTP_" + name.upper().replace("-", "_")] = value
    captured = {}

    def start_response(status, response_headers):
        captured["status"] = status
        captured["headers"] = dict(response_headers)

    chunks = app(environ, start_response)
    return captured["status"], captured["headers"], b"".join(chunks).decode("utf-8")


def signed_post(app, event, body):
    return call(
        app,
        "POST",
        "/github-hook",
        {"X-GitHub-Event": event, "X-Hub-Signature": sign(SECRET, body)},
        body,
    )


class Recorder:
    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, event, payload):
        self.calls.append((event, payload))
        if self.error is not None:
            raise self.error
        return self.result


def test_root_page():
    status, _, body = call(WebhookApp(SECRET, Recorder()))
    assert status.startswith("200")
    assert body == "Triagebot is awaiting triage."


def test_unknown_path_is_not_found():
    status, _, body = call(WebhookApp(SECRET, Recorder()), path="/nowhere")
    assert status.startswith("404")
    assert body == ""


def test_hook_requires_post():
    status, headers, _ = call(WebhookApp(SECRET, Recorder()), "GET", "/github-hook")
    assert status.startswith("405")
    assert headers["Allow"] == "POST"


def test_missing_event_header():
    status, _, body = call(
        WebhookApp(SECRET, Recorder()), "POST", "/github-hook", {"X-Hub-Signature": "sha1=00"}
    )
    assert status.startswith("400")
    assert body == "X-GitHub-Event header must be set"


def test_event_header_not_utf8():
    bad = "\xff\xfe".encode("latin-1").decode("latin-1")
    status, _, body = call(
        WebhookApp(SECRET, Recorder()), "POST", "/github-hook", {"X-GitHub-Event": bad}
    )
    assert status.startswith("400")
    assert body == "X-GitHub-Event header must be UTF-8 encoded"


def test_missing_signature_header():
    status, _, body = call(
        WebhookApp(SECRET, Recorder()), "POST", "/github-hook", {"X-GitHub-Event": "issues"}
    )
    assert status.startswith("400")
    assert body == "X-Hub-Signature header must be set"


def test_wrong_signature_is_forbidden():
    recorder = Recorder()
    body = b'{"action": "opened"}'
    status, _, text = call(
        WebhookApp(SECRET, recorder),
        "POST",
        "/github-hook",
        {"X-GitHub-Event": "issues", "X-Hub-Signature": sign("other", body)},
        body,
    )
    assert status.startswith("403")
    assert text == "Wrong signature"
    assert recorder.calls == []


def test_payload_must_be_utf8():
    recorder = Recorder()
    status, _, text = signed_post(WebhookApp(SECRET, recorder), "issues", b"\xff\xfe")
    assert status.startswith("400")
    assert text == "Payload must be UTF-8"
    assert recorder.calls == []


def test_processed_request_passes_event_and_payload():
    recorder = Recorder(result=True)
    body = b'{"action": "opened"}'
    status, _, text = signed_post(WebhookApp(SECRET, recorder), "issues", body)
    assert status.startswith("200")
    assert text == "processed request"
    assert recorder.calls == [(EventName.ISSUE, body.decode())]


def test_ignored_request():
    recorder = Recorder(result=False)
    status, _, text = signed_post(WebhookApp(SECRET, recorder), "something_else", b"{}")
    assert status.startswith("200")
    assert text == "ignored request"
    assert recorder.calls[0][0] is EventName.OTHER


def test_webhook_failure_is_server_error():
    recorder = Recorder(error=RuntimeError("boom"))
    status, _, text = signed_post(WebhookApp(SECRET, recorder), "issues", b"{}")
    assert status.startswith("500")
    assert text.startswith("request failed:")
    assert "boom" in text


def test_request_id_header_is_uuid():
    _, headers, _ = call(WebhookApp(SECRET, Recorder()))
    request_id = headers["X-Request-Id"]
    assert str(uuid.UUID(request_id)) == request_id


def test_request_ids_differ():
    app = WebhookApp(SECRET, Recorder())
    first = call(app)[1]["X-Request-Id"]
    second = call(app)[1]["X-Request-Id"]
    assert first != second
    assert len(first) == len(second)


def test_secret_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", SECRET)
    status, _, text = signed_post(WebhookApp(webhook=Recorder()), "push", b"{}")
    assert status.startswith("200")
    assert text == "processed request"


def test_default_webhook_ignores_other_events():
    status, _, text = signed_post(WebhookApp(SECRET), "ping", b"{}")
    assert status.startswith("200")
    assert text == "ignored request"


def test_default_webhook_processes_valid_json():
    status, _, text = signed_post(WebhookApp(SECRET), "issue_comment", b'{"action": "created"}')
    assert text == "processed request"


def test_default_webhook_rejects_invalid_json():
    status, _, text = signed_post(WebhookApp(SECRET), "issues", b"{not json")
    assert status.startswith("500")
    assert text.startswith("request failed:")


def test_main_rejects_non_numeric_port_argument():
    with pytest.raises(SystemExit):
        main(["--port", "abc"])


def test_main_rejects_invalid_port_environment(monkeypatch):
    monkeypatch.setenv("PORT", "abc")
    with pytest.raises(ValueError):
        main([])


def test_main_rejects_out_of_range_port():
    with pytest.raises(ValueError):
        main(["--port", "70000"])