"""
tests.test_token_codec

TokenCodec issue/verify: round trip, expiry, tampering and malformed payloads.
"""

from __future__ import annotations

import string
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from sakhi_api.auth.jwt import JwtConfig, TokenCodec
from sakhi_api.auth.models import Identity, Role
from sakhi_api.errors import InvalidCredential

CFG = JwtConfig(alg="HS256", issuer="sakhi-test", audience="sakhi-test-clients", secret="s3cret")
B64URL_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


@pytest.fixture()
def codec() -> TokenCodec:
    return TokenCodec(CFG)


@pytest.mark.parametrize("role", [Role.user, Role.admin])
def test_round_trip_reproduces_identity(codec: TokenCodec, role: Role) -> None:
    identity = Identity(user_id="u-123", role=role)
    assert codec.verify(codec.issue(identity, ttl=timedelta(minutes=5))) == identity


def test_payload_carries_expected_claims(codec: TokenCodec) -> None:
    now = datetime.now(tz=UTC)
    token = codec.issue(Identity(user_id="u-1", role=Role.user), ttl=timedelta(hours=2), now=now)
    claims = jwt.decode(token, options={"verify_signature": False})
    assert claims["sub"] == "u-1"
    assert claims["role"] == "USER"
    assert claims["exp"] - claims["iat"] == 2 * 3600


def test_expired_token_is_rejected(codec: TokenCodec) -> None:
    issued = datetime.now(tz=UTC) - timedelta(hours=2)
    token = codec.issue(Identity(user_id="u-1", role=Role.user), ttl=timedelta(hours=1), now=issued)
    with pytest.raises(InvalidCredential):
        codec.verify(token)


def test_token_expiring_now_is_rejected(codec: TokenCodec) -> None:
    # now >= iat + ttl counts as expired.
    issued = datetime.now(tz=UTC) - timedelta(minutes=10)
    token = codec.issue(
        Identity(user_id="u-1", role=Role.user), ttl=timedelta(minutes=10), now=issued
    )
    with pytest.raises(InvalidCredential):
        codec.verify(token)


def test_any_modified_character_breaks_verification(codec: TokenCodec) -> None:
    token = codec.issue(Identity(user_id="u-1", role=Role.admin))
    for i in range(len(token)):
        replacement = "A" if token[i] != "A" else "B"
        tampered = token[:i] + replacement + token[i + 1 :]
        with pytest.raises(InvalidCredential):
            codec.verify(tampered)


def test_padding_bits_of_last_signature_character_are_checked(codec: TokenCodec) -> None:
    # An HS256 signature is 32 bytes, so its last base64url character carries 2 unused bits.
    token = codec.issue(Identity(user_id="u-1", role=Role.user))
    for c in B64URL_ALPHABET.replace(token[-1], ""):
        with pytest.raises(InvalidCredential):
            codec.verify(token[:-1] + c)


def test_wrong_secret_is_rejected(codec: TokenCodec) -> None:
    other = TokenCodec(
        JwtConfig(alg=CFG.alg, issuer=CFG.issuer, audience=CFG.audience, secret="other")
    )
    with pytest.raises(InvalidCredential):
        codec.verify(other.issue(Identity(user_id="u-1", role=Role.user)))


def test_wrong_audience_is_rejected(codec: TokenCodec) -> None:
    other = TokenCodec(
        JwtConfig(alg=CFG.alg, issuer=CFG.issuer, audience="elsewhere", secret=CFG.secret)
    )
    with pytest.raises(InvalidCredential):
        codec.verify(other.issue(Identity(user_id="u-1", role=Role.user)))


def _signed(**overrides: object) -> str:
    now = int(datetime.now(tz=UTC).timestamp())
    claims: dict[str, object] = {
        "iss": CFG.issuer,
        "aud": CFG.audience,
        "sub": "u-1",
        "role": "USER",
        "iat": now,
        "exp": now + 600,
    }
    claims.update(overrides)
    return jwt.encode({k: v for k, v in claims.items() if v is not None}, CFG.secret, "HS256")


@pytest.mark.parametrize(
    "overrides",
    [
        {"role": "SUPERUSER"},
        {"role": None},
        {"sub": ""},
        {"sub": None},
        {"exp": None},
    ],
)
def test_malformed_payload_is_rejected(codec: TokenCodec, overrides: dict[str, object]) -> None:
    with pytest.raises(InvalidCredential):
        codec.verify(_signed(**overrides))


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
def test_garbage_is_rejected_with_generic_message(codec: TokenCodec, garbage: str) -> None:
    with pytest.raises(InvalidCredential) as exc_info:
        codec.verify(garbage)
    assert exc_info.value.message == "Invalid token"
