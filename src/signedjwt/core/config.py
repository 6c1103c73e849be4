from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    algorithm: str = "HS256"
    secret_key: str = "change-me-in-env"
    public_key_file: str | None = None
    private_key_file: str | None = None
    leeway_seconds: int = 0
    audience: str | None = None
    issuer: str | None = None
    token_ttl_seconds: int = 3600

    @property
    def uses_rsa(self) -> bool:
        return self.algorithm.upper().startswith("RS")

    def signing_key(self) -> str:
        if self.uses_rsa:
            return _read_key_file(self.private_key_file, "JWT_PRIVATE_KEY_FILE")
        return self.secret_key

    def verification_key(self) -> str:
        if self.uses_rsa:
            return _read_key_file(self.public_key_file, "JWT_PUBLIC_KEY_FILE")
        return self.secret_key


def _read_key_file(path: str | None, variable: str) -> str:
    if not path:
        raise ValueError(f"{variable} must be set for RSA algorithms.")
    return Path(path).expanduser().read_text(encoding="utf-8")


def _strip_wrapping_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_dotenv_if_present() -> None:
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = _strip_wrapping_quotes(value.strip())
        if key:
            os.environ.setdefault(key, value)


def _env_optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_dotenv_if_present()
    return Settings(
        algorithm=os.getenv("JWT_ALGORITHM", "HS256").strip() or "HS256",
        secret_key=os.getenv("JWT_SECRET_KEY", "change-me-in-env"),
        public_key_file=_env_optional("JWT_PUBLIC_KEY_FILE"),
        private_key_file=_env_optional("JWT_PRIVATE_KEY_FILE"),
        leeway_seconds=_env_int("JWT_LEEWAY_SECONDS", 0),
        audience=_env_optional("JWT_AUDIENCE"),
        issuer=_env_optional("JWT_ISSUER"),
        token_ttl_seconds=_env_int("JWT_ACCESS_TOKEN_TTL_SECONDS", 3600),
    )


def clear_settings_cache() -> None:
    get_settings.cache_clear()
