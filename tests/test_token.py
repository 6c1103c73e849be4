import hashlib
import hmac

import pytest

from signedjwt import AlgorithmStrategy, Token, default_registry
from signedjwt.core import base64url
from signedjwt.core.exceptions import (
    InvalidEncodingError,
    InvalidSignatureError,
    InvalidTokenError,
    SerializationError,
    UnsupportedAlgorithmError,
)

SECRET = "top-secret"


def _hs256_token(header_json: str, claims_json: str, secret: str = SECRET) -> str:
    data = f"{base64url.encode(header_json)}.{base64url.encode(claims_json)}"
    signature = hmac.new(secret.encode("utf-8"), data.encode("ascii"), hashlib.sha256).digest()
    return f"{data}.{base64url.encode(signature)}"


def test_create_seeds_alg_and_typ_header():
    token = Token.create("HS256")
    assert token.header == {"alg": "HS256", "typ": "JWT"}
    assert token.algorithm == "HS256"
    assert token.claims == {}
    assert token.hash is None
    assert str(token) == ""


def test_claim_accessors():
    token = Token.create("HS256")
    token.set_claim("sub", "42")
    token.set_claim("admin", False)
    token.set_claim("note", None)

    assert token.get_claim("sub") == "42"
    assert token.get_claim("missing") is None
    assert token.get_claim("missing", "fallback") == "fallback"
    assert "sub" in token
    assert "admin" in token
    assert "note" not in token
    assert len(token) == 3


def test_iteration_yields_claims_in_insertion_order_and_restarts():
    token = Token.create("HS256")
    token.set_claim("b", 1)
    token.set_claim("a", 2)

    assert list(token) == [("b", 1), ("a", 2)]
    assert list(token) == [("b", 1), ("a", 2)]


def test_claims_and_header_are_copies():
    token = Token.create("HS256")
    token.set_claim("sub", "42")
    token.claims["sub"] = "changed"
    token.header["alg"] = "RS256"

    assert token.get_claim("sub") == "42"
    assert token.algorithm == "HS256"


def test_encode_produces_three_segment_hash_and_caches_it():
    token = Token.create("HS256")
    token.set_claim("sub", "42")

    encoded = token.encode(SECRET)

    assert encoded == _hs256_token('{"alg":"HS256","typ":"JWT"}', '{"sub":"42"}')
    assert token.hash == encoded
    assert str(token) == encoded


def test_encode_is_idempotent_without_mutation():
    token = Token.create("HS512")
    token.set_claim("sub", "42")
    assert token.encode(SECRET) == token.encode(SECRET)


def test_mutators_clear_the_cached_hash():
    token = Token.create("HS256")
    token.set_claim("sub", "42")
    first = token.encode(SECRET)

    token.set_claim("sub", "43")
    assert token.hash is None
    second = token.encode(SECRET)
    assert second != first

    token.set_header_field("kid", "k1")
    assert token.hash is None
    assert token.encode(SECRET) != second


def test_remove_claim_only_clears_hash_when_claim_existed():
    token = Token.create("HS256")
    token.set_claim("sub", "42")
    encoded = token.encode(SECRET)

    token.remove_claim("missing")
    assert token.hash == encoded

    token.remove_claim("sub")
    assert token.hash is None
    assert token.get_claim("sub") is None


def test_setting_alg_header_switches_algorithm():
    token = Token.create("HS256")
    token.set_header_field("alg", "HS384")
    assert token.algorithm == "HS384"
    assert len(base64url.decode(token.encode(SECRET).split(".")[2])) == 48


def test_encode_with_unknown_algorithm_leaves_no_hash():
    token = Token.create("HS256")
    token.set_claim("sub", "42")
    token.encode(SECRET)
    token.set_header_field("alg", "none")

    with pytest.raises(UnsupportedAlgorithmError):
        token.encode(SECRET)
    assert token.hash is None


def test_encode_without_alg_header_is_unsupported():
    token = Token()
    token.set_claim("sub", "42")
    with pytest.raises(UnsupportedAlgorithmError):
        token.encode(SECRET)


def test_encode_with_unserializable_claim_raises_serialization_error():
    token = Token.create("HS256")
    token.set_claim("when", object())
    with pytest.raises(SerializationError):
        token.encode(SECRET)
    assert token.hash is None


def test_decode_populates_header_claims_and_keeps_original_hash():
    raw = _hs256_token('{ "typ": "JWT", "alg": "HS256", "kid": "k1" }', '{ "sub": "42", "aud": ["a", "b"] }')

    token = Token.decode(raw)

    assert token.hash == raw
    assert token.algorithm == "HS256"
    assert token.header == {"typ": "JWT", "alg": "HS256", "kid": "k1"}
    assert token.claims == {"sub": "42", "aud": ["a", "b"]}


def test_decode_round_trip_keeps_content():
    token = Token.create("HS256")
    token.set_header_field("kid", "k1")
    token.set_claim("sub", "42")
    token.set_claim("scopes", ["read", "write"])
    token.set_claim("profile", {"name": "Ada", "age": 36})

    decoded = Token.decode(token.encode(SECRET))

    assert decoded.header == token.header
    assert decoded.claims == token.claims
    assert decoded.verify(SECRET) is True


@pytest.mark.parametrize("raw", ["", "abc", "a.b", "not.a.jwt.token"])
def test_decode_rejects_wrong_segment_count(raw):
    with pytest.raises(InvalidTokenError):
        Token.decode(raw)


def test_decode_rejects_non_string_input():
    with pytest.raises(InvalidTokenError):
        Token.decode(b"a.b.c")


def test_decode_rejects_bad_base64_segments():
    valid = _hs256_token('{"alg":"HS256","typ":"JWT"}', '{"sub":"42"}')
    header, claims, signature = valid.split(".")

    for raw in (f"a$b.{claims}.{signature}", f"{header}.{claims}=.{signature}", f"{header}.{claims}.abcde"):
        with pytest.raises(InvalidTokenError) as exc:
            Token.decode(raw)
        assert isinstance(exc.value.__cause__, InvalidEncodingError)


def test_decode_wraps_malformed_json():
    raw = _hs256_token('{"alg":"HS256",', '{"sub":"42"}')
    with pytest.raises(InvalidTokenError) as exc:
        Token.decode(raw)
    assert isinstance(exc.value.__cause__, SerializationError)


@pytest.mark.parametrize(
    "header_json, claims_json",
    [
        ('{"alg":"HS256"}', '{"sub":"42"}'),
        ('{"alg":"HS256","typ":"JWS"}', '{"sub":"42"}'),
        ("{}", '{"sub":"42"}'),
        ('["JWT"]', '{"sub":"42"}'),
        ('{"alg":"HS256","typ":"JWT"}', "{}"),
        ('{"alg":"HS256","typ":"JWT"}', "[1,2]"),
        ('{"alg":"HS256","typ":"JWT"}', '"sub"'),
    ],
)
def test_decode_rejects_invalid_header_or_claims(header_json, claims_json):
    with pytest.raises(InvalidTokenError):
        Token.decode(_hs256_token(header_json, claims_json))


def test_subclass_can_register_extra_algorithms():
    class PrefixedToken(Token):
        algorithms = default_registry.with_strategy(
            AlgorithmStrategy(
                "XS1",
                sign=lambda key, data: b"xs1:" + data,
                verify=lambda key, data, signature: signature == b"xs1:" + data,
            )
        )

    token = PrefixedToken.create("XS1")
    token.set_claim("sub", "42")
    decoded = PrefixedToken.decode(token.encode("ignored"))

    assert isinstance(decoded, PrefixedToken)
    assert decoded.verify("ignored") is True
    with pytest.raises(InvalidSignatureError) as exc:
        Token.decode(decoded.hash).verify("ignored")
    assert isinstance(exc.value.__cause__, UnsupportedAlgorithmError)
