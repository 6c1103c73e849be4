from __future__ import annotations

import base64
import binascii
import re

from signedjwt.core.exceptions import InvalidEncodingError

_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")


def encode(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode(data: str, *, canonical: bool = True) -> bytes:
    if not isinstance(data, str) or not _ALPHABET.match(data):
        raise InvalidEncodingError("Segment contains characters outside the base64url alphabet.")
    if len(data) % 4 == 1:
        raise InvalidEncodingError("Segment has an invalid base64url length.")
    padding = "=" * (-len(data) % 4)
    try:
        decoded = base64.urlsafe_b64decode(data + padding)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(f"Could not decode base64url segment: {exc}") from exc
    # unused trailing bits must be zero, one string per byte sequence
    if canonical and encode(decoded) != data:
        raise InvalidEncodingError("Segment is not canonical base64url.")
    return decoded
