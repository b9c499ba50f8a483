"""WSGI application that receives repository webhooks, and the command that serves it."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import uuid
from http import HTTPStatus
from typing import Callable, Iterable
from wsgiref.simple_server import make_server

from .events import EventName, deserialize_payload, parse_event_name
from .payload import SignedPayloadError, assert_signed

log = logging.getLogger(__name__)

Webhook = Callable[[EventName, str], bool]

ROOT_MESSAGE = "Triagebot is awaiting triage."
DEFAULT_PORT = 8000


class _HeaderNotUtf8(Exception):
    pass


def _default_webhook(event: EventName, payload: str) -> bool:
    """Accept every known event whose payload is valid JSON; ignore the others."""
    if event is EventName.OTHER:
        return False
    deserialize_payload(payload)
    log.info("handling %s event", event)
    return True


def _status(code: HTTPStatus) -> str:
    return f"{code.value} {code.phrase}"


def _header(environ: dict, name: str) -> str | None:
    key = "HTTP_" + name.upper().replace("-", "_")
    value = environ.get(key)
    if value is None:
        return None
    try:
        return value.encode("latin-1").decode("utf-8")
    except UnicodeError as err:
        raise _HeaderNotUtf8(name) from err


def _read_body(environ: dict) -> bytes:
    raw_length = environ.get("CONTENT_LENGTH") or "0"
    try:
        length = int(raw_length)
    except ValueError:
        length = 0
    stream = environ.get("wsgi.input")
    if stream is None or length <= 0:
        return b""
    return stream.read(length)


class WebhookApp:
    """Serves the status page and verifies and dispatches signed webhook deliveries.

    ``webhook`` is called with the event name and the decoded payload; it
    returns whether the event was processed and raises when handling failed.
    Without a ``secret``, ``GITHUB_WEBHOOK_SECRET`` is used.
    """

    def __init__(self, secret: str | bytes | None = None, webhook: Webhook | None = None) -> None:
        self.secret = secret
        self.webhook = webhook if webhook is not None else _default_webhook

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        request_id = str(uuid.uuid4())
        log.info("request %s %s %s", request_id, environ.get("REQUEST_METHOD"), environ.get("PATH_INFO"))
        code, headers, body = self._respond(environ)
        log.info("response %s = %s", request_id, code.value)
        data = body.encode("utf-8")
        start_response(
            _status(code),
            [
                *headers,
                ("Content-Length", str(len(data))),
                ("X-Request-Id", request_id),
            ],
        )
        return [data]

    def _respond(self, environ: dict) -> tuple[HTTPStatus, list[tuple[str, str]], str]:
        path = environ.get("PATH_INFO", "/")
        if path == "/":
            return HTTPStatus.OK, [], ROOT_MESSAGE
        if path != "/github-hook":
            return HTTPStatus.NOT_FOUND, [], ""
        if environ.get("REQUEST_METHOD", "GET").upper() != "POST":
            return HTTPStatus.METHOD_NOT_ALLOWED, [("Allow", "POST")], ""

        try:
            event_header = _header(environ, "X-GitHub-Event")
        except _HeaderNotUtf8:
            return HTTPStatus.BAD_REQUEST, [], "X-GitHub-Event header must be UTF-8 encoded"
        if event_header is None:
            return HTTPStatus.BAD_REQUEST, [], "X-GitHub-Event header must be set"
        event = parse_event_name(event_header)
        log.debug("event=%s", event)

        try:
            signature = _header(environ, "X-Hub-Signature")
        except _HeaderNotUtf8:
            return HTTPStatus.BAD_REQUEST, [], "X-Hub-Signature header must be UTF-8 encoded"
        if signature is None:
            return HTTPStatus.BAD_REQUEST, [], "X-Hub-Signature header must be set"
        log.debug("signature=%s", signature)

        payload = _read_body(environ)
        try:
            assert_signed(signature, payload, self.secret)
        except SignedPayloadError:
            return HTTPStatus.FORBIDDEN, [], "Wrong signature"
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError:
            return HTTPStatus.BAD_REQUEST, [], "Payload must be UTF-8"

        try:
            processed = self.webhook(event, text)
        except Exception as err:  # any handler failure becomes a 500
            log.error("request failed: %r", err)
            return HTTPStatus.INTERNAL_SERVER_ERROR, [], f"request failed: {err!r}"
        return HTTPStatus.OK, [], "processed request" if processed else "ignored request"


def main(argv: list[str] | None = None) -> int:
    """Serve the webhook application until interrupted."""
    parser = argparse.ArgumentParser(description="Serve the triage bot webhook endpoint.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

    port = args.port
    if port is None:
        env_port = os.environ.get("PORT")
        port = int(env_port) if env_port is not None else DEFAULT_PORT
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range: {port}")

    app = WebhookApp()
    try:
        with make_server(args.host, port, app) as httpd:
            log.info("Listening on http://%s:%d", args.host, port)
            try:
                httpd.serve_forever()
            except KeyboardInterrupt:
                pass
    except OSError as err:
        print(f"Failed to run server: {err!r}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())