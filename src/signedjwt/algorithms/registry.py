from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator

from cryptography.exceptions import UnsupportedAlgorithm as CryptographyUnsupportedAlgorithm

from signedjwt.core.exceptions import SigningError, UnsupportedAlgorithmError, VerificationError

SignFunction = Callable[[Any, bytes], bytes]
VerifyFunction = Callable[[Any, bytes, bytes], bool]

_PRIMITIVE_ERRORS = (TypeError, ValueError, CryptographyUnsupportedAlgorithm)


@dataclass(frozen=True)
class AlgorithmStrategy:
    name: str
    sign: SignFunction
    verify: VerifyFunction


def _as_bytes(data: str | bytes) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class AlgorithmRegistry:
    """Read-only table of signing strategies keyed by their JWS "alg" identifier.

    The table is fixed at construction time. ``with_strategy`` returns a new
    registry, so a registry can be shared between threads without locking.
    """

    def __init__(self, strategies: Iterable[AlgorithmStrategy] = ()) -> None:
        table: dict[str, AlgorithmStrategy] = {}
        for strategy in strategies:
            table[strategy.name] = strategy
        self._strategies = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def names(self) -> tuple[str, ...]:
        return tuple(self._strategies)

    def get(self, name: Any) -> AlgorithmStrategy:
        if not isinstance(name, str) or name not in self._strategies:
            raise UnsupportedAlgorithmError(f"Unsupported hashing algorithm: {name!r}.")
        return self._strategies[name]

    def with_strategy(self, strategy: AlgorithmStrategy) -> AlgorithmRegistry:
        return AlgorithmRegistry([*self._strategies.values(), strategy])

    def sign(self, name: Any, key: Any, data: str | bytes) -> bytes:
        strategy = self.get(name)
        try:
            signature = strategy.sign(key, _as_bytes(data))
        except _PRIMITIVE_ERRORS as exc:
            raise SigningError(f"Unable to sign the JWT with {strategy.name}: {exc}") from exc

        if not isinstance(signature, (bytes, bytearray)) or not signature:
            raise SigningError(f"Unable to sign the JWT: {strategy.name} returned an empty signature.")
        return bytes(signature)

    def verify(self, name: Any, key: Any, data: str | bytes, signature: bytes) -> bool:
        strategy = self.get(name)
        try:
            verified = strategy.verify(key, _as_bytes(data), signature)
        except _PRIMITIVE_ERRORS as exc:
            raise VerificationError(f"Unable to verify the JWT with {strategy.name}: {exc}") from exc

        if not isinstance(verified, bool):
            raise VerificationError(
                f"Invalid return value from the {strategy.name} verifier: {type(verified).__name__}."
            )
        return verified
