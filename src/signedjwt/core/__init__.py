from signedjwt.core.config import Settings, clear_settings_cache, get_settings
from signedjwt.core.exceptions import (
    ExpiredTokenError,
    InvalidAudienceError,
    InvalidEncodingError,
    InvalidSignatureError,
    InvalidTokenError,
    JwtError,
    NotYetValidError,
    SerializationError,
    SigningError,
    UnsupportedAlgorithmError,
    VerificationError,
)
from signedjwt.core.logging import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "JwtError",
    "InvalidEncodingError",
    "SerializationError",
    "UnsupportedAlgorithmError",
    "SigningError",
    "VerificationError",
    "InvalidTokenError",
    "InvalidSignatureError",
    "InvalidAudienceError",
    "ExpiredTokenError",
    "NotYetValidError",
    "configure_logging",
]
