"""RSASSA-PKCS1-v1_5 strategies backed by ``cryptography``.

Signing accepts an ``RSAPrivateKey`` or PEM text of one. Verification accepts
an ``RSAPublicKey``, an ``RSAPrivateKey`` (its public half is used) or PEM
text of either. A signature mismatch returns ``False``; a key that cannot be
used raises, so a misconfigured key is never mistaken for a forged token.
"""

from __future__ import annotations

from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key, load_pem_public_key

from signedjwt.algorithms.registry import AlgorithmStrategy
from signedjwt.core.exceptions import SigningError, VerificationError

RS256 = "RS256"
RS384 = "RS384"
RS512 = "RS512"

_HASHES: dict[str, type[hashes.HashAlgorithm]] = {
    RS256: hashes.SHA256,
    RS384: hashes.SHA384,
    RS512: hashes.SHA512,
}


def _pem_bytes(key: str | bytes) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


def load_private_key(key: Any) -> rsa.RSAPrivateKey:
    if isinstance(key, (str, bytes, bytearray)):
        try:
            key = load_pem_private_key(_pem_bytes(key), password=None)
        except (TypeError, ValueError) as exc:
            raise SigningError(f"Unable to load the RSA private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningError(f"RSA signing requires an RSA private key, got {type(key).__name__}.")
    return key


def load_public_key(key: Any) -> rsa.RSAPublicKey:
    if isinstance(key, (str, bytes, bytearray)):
        data = _pem_bytes(key)
        try:
            key = load_pem_public_key(data)
        except ValueError:
            try:
                key = load_pem_private_key(data, password=None)
            except (TypeError, ValueError) as exc:
                raise VerificationError(f"Unable to load the RSA public key: {exc}") from exc
    if isinstance(key, rsa.RSAPrivateKey):
        key = key.public_key()
    if not isinstance(key, rsa.RSAPublicKey):
        raise VerificationError(f"RSA verification requires an RSA public key, got {type(key).__name__}.")
    return key


def _rsa_strategy(name: str) -> AlgorithmStrategy:
    hash_type = _HASHES[name]

    def sign(key: Any, data: bytes) -> bytes:
        return load_private_key(key).sign(data, padding.PKCS1v15(), hash_type())

    def verify(key: Any, data: bytes, signature: bytes) -> bool:
        public_key = load_public_key(key)
        try:
            public_key.verify(signature, data, padding.PKCS1v15(), hash_type())
        except InvalidSignature:
            return False
        return True

    return AlgorithmStrategy(name=name, sign=sign, verify=verify)


STRATEGIES = tuple(_rsa_strategy(name) for name in (RS256, RS384, RS512))
