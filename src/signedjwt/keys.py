from __future__ import annotations

from typing import Any, Iterator, Mapping

from signedjwt.core.exceptions import InvalidTokenError


def _lookup_candidates(kid: str | int | float) -> Iterator[Any]:
    yield kid
    if isinstance(kid, float) and kid.is_integer():
        kid = int(kid)
        yield kid
    if isinstance(kid, int):
        yield str(kid)
    elif isinstance(kid, str) and kid.lstrip("-").isdigit():
        yield int(kid)


def resolve_key(key: Any, kid: Any) -> Any:
    """Pick the key addressed by ``kid`` when ``key`` is a key-id mapping.

    Anything that is not a mapping, or a token without ``kid``, leaves ``key``
    untouched. An unknown id resolves to ``None`` so the signature check fails.
    """
    if not isinstance(key, Mapping) or kid is None:
        return key
    if isinstance(kid, bool) or not isinstance(kid, (str, int, float)):
        raise InvalidTokenError('Invalid "kid" value. Unable to look up the secret key.')

    for candidate in _lookup_candidates(kid):
        if candidate in key:
            return key[candidate]
    return None
