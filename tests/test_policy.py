"""
tests.test_policy

The self-or-admin ownership rule and the existence-before-ownership helper.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from sakhi_api.auth.models import Identity, Role
from sakhi_api.auth.policy import Decision, authorize, authorize_existing, enforce
from sakhi_api.errors import Forbidden, NotFound

USER = Identity(user_id="alice", role=Role.user)
ADMIN = Identity(user_id="root", role=Role.admin)


@dataclass
class Record:
    user_id: str


@pytest.mark.parametrize(
    ("identity", "owner", "expected"),
    [
        (USER, "alice", Decision.allow),
        (USER, "bob", Decision.deny),
        (USER, "", Decision.deny),
        (ADMIN, "alice", Decision.allow),
        (ADMIN, "root", Decision.allow),
        (ADMIN, "anyone-at-all", Decision.allow),
    ],
)
def test_authorize_truth_table(identity: Identity, owner: str, expected: Decision) -> None:
    assert authorize(identity, owner) is expected


def test_enforce_raises_forbidden_on_deny() -> None:
    with pytest.raises(Forbidden):
        enforce(USER, "bob")
    enforce(USER, "alice")
    enforce(ADMIN, "bob")


@pytest.mark.parametrize("identity", [USER, ADMIN])
def test_missing_record_is_not_found_for_every_role(identity: Identity) -> None:
    with pytest.raises(NotFound) as exc_info:
        authorize_existing(identity, None, not_found="Log not found")
    assert exc_info.value.message == "Log not found"


def test_existing_record_uses_stored_owner() -> None:
    mine, theirs = Record(user_id="alice"), Record(user_id="bob")
    assert authorize_existing(USER, mine, not_found="x") is mine
    assert authorize_existing(ADMIN, theirs, not_found="x") is theirs
    with pytest.raises(Forbidden):
        authorize_existing(USER, theirs, not_found="x")
