from signedjwt.algorithms import hmac_sha, rsa_pkcs1
from signedjwt.algorithms.hmac_sha import HS256, HS384, HS512
from signedjwt.algorithms.registry import AlgorithmRegistry, AlgorithmStrategy
from signedjwt.algorithms.rsa_pkcs1 import RS256, RS384, RS512

default_registry = AlgorithmRegistry([*hmac_sha.STRATEGIES, *rsa_pkcs1.STRATEGIES])
SUPPORTED_ALGORITHMS = default_registry.names()

__all__ = [
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
]
