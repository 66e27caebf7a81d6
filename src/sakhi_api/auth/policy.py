"""
sakhi_api.auth.policy

Ownership policy shared by every owned resource (period logs, reminders, posts, profiles).

Responsibilities:
- Decide ALLOW/DENY with one rule: admin, or the caller owns the resource.
- Enforce "existence before ownership" for routes that act on a stored record.
"""

from __future__ import annotations

import enum
from typing import Protocol, TypeVar

from sakhi_api.auth.models import Identity
from sakhi_api.errors import Forbidden, NotFound
from sakhi_api.observability.logging import get_logger

log = get_logger(__name__)


class Decision(enum.StrEnum):
    allow = "ALLOW"
    deny = "DENY"


class OwnedResource(Protocol):
    @property
    def user_id(self) -> str: ...


R = TypeVar("R", bound=OwnedResource)


def authorize(identity: Identity, owner_id: str) -> Decision:
    if identity.is_admin or identity.user_id == owner_id:
        return Decision.allow
    return Decision.deny


def enforce(identity: Identity, owner_id: str) -> None:
    if authorize(identity, owner_id) is Decision.deny:
        log.info("ownership_denied", caller=identity.user_id, owner=owner_id)
        raise Forbidden()


def authorize_existing(identity: Identity, resource: R | None, *, not_found: str) -> R:
    """
    Authorize against a record already loaded from the store.

    The owner id is read from the stored record, never from the request body,
    and a missing record is reported as 404 before ownership is considered.
    """

    if resource is None:
        raise NotFound(not_found)
    enforce(identity, resource.user_id)
    return resource


# --- Module Notes -----------------------------------------------------------
# Decisions are never cached: each call re-checks against the state the store returned.
