from __future__ import annotations

import json
from typing import Any, Mapping

from signedjwt.core.exceptions import SerializationError


def encode(data: Mapping[str, Any]) -> str:
    try:
        return json.dumps(dict(data), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Unable to encode the given data ({exc}).") from exc


def decode(raw: str | bytes) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueError
        raise SerializationError(f"Unable to decode the given JSON string ({exc}).") from exc
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a JSON object, got {type(data).__name__}.")
    return data
