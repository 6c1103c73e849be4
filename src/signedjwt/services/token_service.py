from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from signedjwt.core.config import Settings
from signedjwt.core.exceptions import JwtError
from signedjwt.token import Token

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(self, settings: Settings, *, token_class: type[Token] = Token) -> None:
        self._settings = settings
        self._token_class = token_class

    @property
    def algorithm(self) -> str:
        return self._settings.algorithm

    @property
    def token_ttl_seconds(self) -> int:
        return self._settings.token_ttl_seconds

    def issue(self, claims: Mapping[str, Any], *, headers: Mapping[str, Any] | None = None) -> str:
        token = self._token_class.create(self._settings.algorithm)
        for name, value in (headers or {}).items():
            token.set_header_field(name, value)

        now = int(time.time())
        token.set_claim("iat", now)
        if self.token_ttl_seconds > 0:
            token.set_claim("exp", now + self.token_ttl_seconds)
        if self._settings.issuer:
            token.set_claim("iss", self._settings.issuer)
        if self._settings.audience:
            token.set_claim("aud", self._settings.audience)
        for name, value in claims.items():
            token.set_claim(name, value)

        encoded = token.encode(self._settings.signing_key())
        logger.info("Issued token alg=%s sub=%s", token.algorithm, token.get_claim("sub"))
        return encoded

    def validate(self, raw: str) -> Token:
        # a missing or unreadable key file is a configuration error, not a rejected token
        key = self._settings.verification_key()
        try:
            token = self._token_class.decode(raw)
            token.verify(
                key,
                self._settings.audience,
                leeway=self._settings.leeway_seconds,
            )
        except JwtError as exc:
            logger.warning("Rejected token: %s", exc)
            raise PermissionError(str(exc)) from exc
        return token
