"""
sakhi_api.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Convert a bearer credential into a typed `Identity` (the authentication gate).
- Offer an explicit `Identity | None` variant for public routes.
- Provide the admin-only guard used by content-management endpoints.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sakhi_api.auth.jwt import TokenCodec
from sakhi_api.auth.models import Identity
from sakhi_api.errors import Forbidden, MissingCredential

# auto_error=False: a missing header or a non-Bearer scheme yields None so we can
# raise our own MissingCredential with the standard body.
_bearer = HTTPBearer(auto_error=False)


def token_codec(request: Request) -> TokenCodec:
    # Created once in `sakhi_api.api.app.create_app`.
    return request.app.state.token_codec  # type: ignore[no-any-return]


def authenticate(creds: HTTPAuthorizationCredentials | None, codec: TokenCodec) -> Identity:
    if creds is None or not creds.credentials:
        raise MissingCredential()
    identity = codec.verify(creds.credentials)
    structlog.contextvars.bind_contextvars(user_id=identity.user_id, role=identity.role.value)
    return identity


def get_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    codec: TokenCodec = Depends(token_codec),
) -> Identity:
    return authenticate(creds, codec)


def get_optional_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    codec: TokenCodec = Depends(token_codec),
) -> Identity | None:
    # Anonymous is fine here, but a presented credential must still be valid.
    if creds is None:
        return None
    return authenticate(creds, codec)


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise Forbidden("Admin access required")
    return identity


# --- Module Notes -----------------------------------------------------------
# The gate never touches the DB: a verified identity is trusted for the rest of the request.
