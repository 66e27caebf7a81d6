"""
sakhi_api.auth.jwt

Signed credential issuing and validation.

Responsibilities:
- Issue HS256 JWTs carrying the caller identity (`sub` + `role`) with an expiry.
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/iat/sub).
- Reject uniformly: callers only ever learn that a token is invalid, never why.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError
from jwt.utils import base64url_decode, base64url_encode

from sakhi_api.auth.models import Identity, Role
from sakhi_api.errors import InvalidCredential
from sakhi_api.observability.logging import get_logger
from sakhi_api.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str
    default_ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            default_ttl=timedelta(minutes=settings.token_ttl_minutes),
        )


class TokenCodec:
    """
    Built once at startup from an explicit `JwtConfig`; read-only afterwards.
    """

    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    def issue(
        self,
        identity: Identity,
        *,
        ttl: timedelta | None = None,
        now: datetime | None = None,
    ) -> str:
        issued_at = now or datetime.now(tz=UTC)
        expires_at = issued_at + (ttl if ttl is not None else self._cfg.default_ttl)
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "aud": self._cfg.audience,
            "sub": identity.user_id,
            "role": identity.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)

    def verify(self, token: str) -> Identity:
        try:
            # Signature, exp (now >= exp is expired), iss and aud are all checked here.
            payload = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                audience=self._cfg.audience,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except InvalidTokenError as e:
            raise _rejected(type(e).__name__) from e
        if not _has_canonical_signature(token):
            raise _rejected("non_canonical_signature")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise _rejected("invalid_subject")
        try:
            role = Role(payload.get("role"))
        except ValueError:
            raise _rejected("invalid_role") from None
        return Identity(user_id=subject, role=role)


def _has_canonical_signature(token: str) -> bool:
    # base64 decoding ignores trailing padding bits; only the canonical encoding is accepted.
    signature = token.rpartition(".")[2]
    try:
        return base64url_encode(base64url_decode(signature)).decode("ascii") == signature
    except ValueError:
        return False


def _rejected(reason: str) -> InvalidCredential:
    log.warning("token_rejected", reason=reason)
    return InvalidCredential()


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `api/routers/auth.py` (signup/login). There is no endpoint
# that mints a token with a caller-chosen role.
