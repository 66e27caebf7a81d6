"""
sakhi_api.auth.models

Auth domain models.

Responsibilities:
- Define the closed role set and the authenticated identity (`Identity`) injected into endpoints.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(enum.StrEnum):
    # Stored in the DB and embedded in credentials; treat as a stable contract.
    user = "USER"
    admin = "ADMIN"


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated caller identity, restated from a verified credential.
    Lives for one request; never re-checked against the user store.
    """

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin
