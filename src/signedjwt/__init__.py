"""Build, sign, decode and verify JSON Web Tokens."""

from signedjwt.algorithms import (
    HS256,
    HS384,
    HS512,
    RS256,
    RS384,
    RS512,
    SUPPORTED_ALGORITHMS,
    AlgorithmRegistry,
    AlgorithmStrategy,
    default_registry,
)
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
from signedjwt.token import Token

__version__ = "1.0.0"

__all__ = [
    "Token",
    "AlgorithmRegistry",
    "AlgorithmStrategy",
    "default_registry",
    "SUPPORTED_ALGORITHMS",
    "HS256",
    "HS384",
    "HS512",
    "RS256",
    "RS384",
    "RS512",
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
]
