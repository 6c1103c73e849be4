class JwtError(Exception):
    """Base class for every error raised by signedjwt."""


class InvalidEncodingError(JwtError, ValueError):
    """Raised when a base64url segment is malformed."""


class SerializationError(JwtError, ValueError):
    """Raised when JSON is malformed or does not describe an object."""


class UnsupportedAlgorithmError(JwtError, ValueError):
    """Raised when the "alg" header is missing or not registered."""


class SigningError(JwtError, RuntimeError):
    """Raised when the signing primitive rejects the key or data."""


class VerificationError(JwtError, RuntimeError):
    """Raised when the verification primitive rejects the key or data."""


class InvalidTokenError(JwtError, ValueError):
    """Raised on structural violations: segments, typ, aud or time claim values."""


class InvalidSignatureError(JwtError, ValueError):
    """Raised when the signature does not verify."""


class InvalidAudienceError(JwtError, ValueError):
    """Raised when the expected audience is not listed in "aud"."""


class ExpiredTokenError(JwtError, ValueError):
    """Raised when "exp" has passed."""


class NotYetValidError(JwtError, ValueError):
    """Raised when "iat" or "nbf" lies in the future."""
