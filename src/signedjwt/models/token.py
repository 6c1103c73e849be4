from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from signedjwt.token import Token


class VerifiedToken(BaseModel):
    header: dict[str, Any] = Field(default_factory=dict)
    claims: dict[str, Any] = Field(default_factory=dict)

    @property
    def subject(self) -> Any:
        return self.claims.get("sub")

    @classmethod
    def from_token(cls, token: Token) -> VerifiedToken:
        return cls(header=token.header, claims=token.claims)
