"""Verification of HMAC-SHA1 signatures on webhook payloads."""

from __future__ import annotations

import binascii
import hashlib
import hmac
import logging
import os

log = logging.getLogger(__name__)

_PREFIX_LEN = len("sha1=")


class SignedPayloadError(Exception):
    """Raised when a payload signature does not validate."""

    def __init__(self) -> None:
        super().__init__("failed to validate payload")


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def sign(secret: str | bytes, payload: str | bytes) -> str:
    """Return the ``sha1=<hex>`` signature of ``payload`` under ``secret``."""
    digest = hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha1).hexdigest()
    return f"sha1={digest}"


def assert_signed(
    signature: str, payload: str | bytes, secret: str | bytes | None = None
) -> None:
    """Raise SignedPayloadError unless ``signature`` signs ``payload``.

    The first five characters of the signature (the algorithm prefix) are
    skipped. When no secret is given, ``GITHUB_WEBHOOK_SECRET`` is used.
    """
    if len(signature) < _PREFIX_LEN:
        raise SignedPayloadError()
    encoded = signature[_PREFIX_LEN:]
    try:
        expected = binascii.unhexlify(encoded)
    except (binascii.Error, ValueError) as err:
        log.debug("hex decode failed for %r: %s", encoded, err)
        raise SignedPayloadError() from err

    if secret is None:
        secret = os.environ.get("GITHUB_WEBHOOK_SECRET")
        if secret is None:
            raise RuntimeError("Missing GITHUB_WEBHOOK_SECRET")

    actual = hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha1).digest()
    if not hmac.compare_digest(actual, expected):
        raise SignedPayloadError()