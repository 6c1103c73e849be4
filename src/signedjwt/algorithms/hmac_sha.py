from __future__ import annotations

import hashlib
import hmac
from typing import Any, Callable

from signedjwt.algorithms.registry import AlgorithmStrategy
from signedjwt.core.exceptions import SigningError, VerificationError

HS256 = "HS256"
HS384 = "HS384"
HS512 = "HS512"

_DIGESTS: dict[str, Callable[..., Any]] = {
    HS256: hashlib.sha256,
    HS384: hashlib.sha384,
    HS512: hashlib.sha512,
}


def _secret(key: Any, error: type[Exception]) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise error(f"HMAC key must be str or bytes, got {type(key).__name__}.")


def _hmac_strategy(name: str) -> AlgorithmStrategy:
    digest = _DIGESTS[name]

    def sign(key: Any, data: bytes) -> bytes:
        return hmac.new(_secret(key, SigningError), data, digest).digest()

    def verify(key: Any, data: bytes, signature: bytes) -> bool:
        expected = hmac.new(_secret(key, VerificationError), data, digest).digest()
        return hmac.compare_digest(expected, signature)

    return AlgorithmStrategy(name=name, sign=sign, verify=verify)


STRATEGIES = tuple(_hmac_strategy(name) for name in (HS256, HS384, HS512))
