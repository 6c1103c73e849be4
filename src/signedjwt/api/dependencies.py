from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from signedjwt.core.config import Settings, get_settings
from signedjwt.models import VerifiedToken
from signedjwt.services import TokenService

http_bearer = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def _cached_token_service(settings: Settings) -> TokenService:
    return TokenService(settings=settings)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return _cached_token_service(settings)


def require_verified_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    token_service: TokenService = Depends(get_token_service),
) -> VerifiedToken:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        token = token_service.validate(credentials.credentials)
    except PermissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    return VerifiedToken.from_token(token)


def clear_dependency_caches() -> None:
    _cached_token_service.cache_clear()
