from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Iterator

from signedjwt.algorithms import AlgorithmRegistry, default_registry
from signedjwt.core import base64url, json_codec
from signedjwt.core.exceptions import (
    ExpiredTokenError,
    InvalidAudienceError,
    InvalidEncodingError,
    InvalidSignatureError,
    InvalidTokenError,
    NotYetValidError,
    SerializationError,
    UnsupportedAlgorithmError,
    VerificationError,
)
from signedjwt.keys import resolve_key

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _numeric(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    # ints stay ints: JSON integers may exceed the float range
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _decode_segment(segment: str, label: str, *, canonical: bool = True) -> bytes:
    try:
        return base64url.decode(segment, canonical=canonical)
    except InvalidEncodingError as exc:
        raise InvalidTokenError(f"Invalid {label} encoding.") from exc


def _decode_object(raw: bytes, label: str) -> dict[str, Any]:
    try:
        data = json_codec.decode(raw)
    except SerializationError as exc:
        raise InvalidTokenError(f"Invalid JWT {label}.") from exc
    if not data:
        raise InvalidTokenError(f"Invalid JWT {label}.")
    return data


class Token:
    """A JSON Web Token: header fields, claims and the signed wire string.

    The wire string (``hash``) is only ever the output of the last successful
    ``encode`` or the exact input given to ``decode``. Every mutation clears it.
    """

    algorithms: AlgorithmRegistry = default_registry
    leeway: int = 0

    def __init__(self) -> None:
        self._algorithm: Any = None
        self._claims: dict[str, Any] = {}
        self._hash: str | None = None
        self._header: dict[str, Any] = {}

    @classmethod
    def create(cls, algorithm: str) -> Token:
        token = cls()
        token.set_header_field("alg", algorithm)
        token.set_header_field("typ", "JWT")
        return token

    @classmethod
    def decode(cls, hash: str) -> Token:
        token = cls()
        token._initialize_from(hash)
        return token

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_claim(name)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._claims.items()))

    def __len__(self) -> int:
        return len(self._claims)

    def __str__(self) -> str:
        return self._hash or ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(alg={self._algorithm!r}, claims={list(self._claims)!r})"

    @property
    def algorithm(self) -> Any:
        return self._algorithm

    @property
    def claims(self) -> dict[str, Any]:
        return dict(self._claims)

    @property
    def header(self) -> dict[str, Any]:
        return dict(self._header)

    @property
    def hash(self) -> str | None:
        return self._hash

    def get_claim(self, name: str, default: Any = None) -> Any:
        return self._claims.get(name, default)

    def get_header_field(self, name: str, default: Any = None) -> Any:
        return self._header.get(name, default)

    def has_claim(self, name: str) -> bool:
        return self._claims.get(name) is not None

    def set_claim(self, name: str, value: Any) -> None:
        self._claims[name] = value
        self._hash = None

    def set_header_field(self, name: str, value: Any) -> None:
        self._header[name] = value
        if name == "alg":
            self._algorithm = value
        self._hash = None

    def remove_claim(self, name: str) -> None:
        if name in self._claims:
            del self._claims[name]
            self._hash = None

    def encode(self, key: Any) -> str:
        segments = [
            base64url.encode(json_codec.encode(self._header)),
            base64url.encode(json_codec.encode(self._claims)),
        ]
        signature = self.algorithms.sign(self._algorithm, key, ".".join(segments))
        segments.append(base64url.encode(signature))

        self._hash = ".".join(segments)
        logger.debug("token.encode alg=%s claims=%d", self._algorithm, len(self._claims))
        return self._hash

    def verify(
        self,
        key: Any,
        audience: str | None = None,
        *,
        leeway: float | None = None,
        clock: Clock | None = None,
    ) -> bool:
        key = resolve_key(key, self.get_header_field("kid"))
        self._verify_signature(key)

        leeway = self.leeway if leeway is None else leeway
        now = (clock or time.time)()
        self._verify_audience(audience)
        self._verify_time_claims(now, leeway)
        return True

    def _initialize_from(self, hash: str) -> None:
        if not isinstance(hash, str):
            raise InvalidTokenError(f"Expected the JWT as a string, got {type(hash).__name__}.")

        segments = hash.split(".")
        if len(segments) != 3:
            raise InvalidTokenError("Unexpected number of JWT segments.")

        raw_header = _decode_segment(segments[0], "header")
        raw_claims = _decode_segment(segments[1], "claims")
        # stray trailing bits in the signature are left for verify to reject
        _decode_segment(segments[2], "signature", canonical=False)

        header = _decode_object(raw_header, "header")
        if header.get("typ") != "JWT":
            raise InvalidTokenError("Invalid JWT type.")
        claims = _decode_object(raw_claims, "claims")

        for name, value in header.items():
            self.set_header_field(name, value)
        for name, value in claims.items():
            self.set_claim(name, value)

        # keep the original bytes so verification signs exactly what was received
        self._hash = hash

    def _verify_signature(self, key: Any) -> None:
        segments = (self._hash or "").split(".")
        if len(segments) != 3:
            raise InvalidSignatureError("Unable to verify the signature due to an invalid JWT hash.")

        data = f"{segments[0]}.{segments[1]}"
        try:
            signature = base64url.decode(segments[2])
            verified = self.algorithms.verify(self._algorithm, key, data, signature)
        except (InvalidEncodingError, UnsupportedAlgorithmError, VerificationError) as exc:
            logger.debug("token.verify.rejected reason=%s", exc)
            raise InvalidSignatureError("Invalid JWT signature.") from exc

        if not verified:
            logger.debug("token.verify.rejected reason=signature_mismatch alg=%s", self._algorithm)
            raise InvalidSignatureError("Invalid JWT signature.")

    def _verify_audience(self, audience: str | None) -> None:
        aud = self.get_claim("aud")
        if aud is None:
            return

        if isinstance(aud, str):
            valid_audiences = [aud]
        elif isinstance(aud, (list, tuple)) and all(isinstance(item, str) for item in aud):
            valid_audiences = list(aud)
        else:
            raise InvalidTokenError('Invalid "aud" value.')

        if audience not in valid_audiences:
            logger.debug("token.verify.rejected reason=audience expected=%s", audience)
            raise InvalidAudienceError("Invalid JWT audience.")

    def _time_claim(self, name: str) -> int | float | None:
        value = self.get_claim(name)
        if value is None:
            return None
        numeric = _numeric(value)
        if numeric is None:
            raise InvalidTokenError(f'Invalid "{name}" value.')
        return numeric

    def _verify_time_claims(self, now: float, leeway: float) -> None:
        expires_at = self._time_claim("exp")
        if expires_at is not None and now - leeway >= expires_at:
            logger.debug("token.verify.rejected reason=expired exp=%s now=%s", expires_at, now)
            raise ExpiredTokenError("The JWT has expired.")

        issued_at = self._time_claim("iat")
        if issued_at is not None and now + leeway < issued_at:
            logger.debug("token.verify.rejected reason=iat_in_future iat=%s now=%s", issued_at, now)
            raise NotYetValidError("The JWT is not yet valid.")

        not_before = self._time_claim("nbf")
        if not_before is not None and now + leeway < not_before:
            logger.debug("token.verify.rejected reason=nbf_in_future nbf=%s now=%s", not_before, now)
            raise NotYetValidError("The JWT is not yet valid.")
