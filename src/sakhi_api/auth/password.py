"""
sakhi_api.auth.password

Password hashing for the credential store (bcrypt).
"""

from __future__ import annotations

import bcrypt


def hash_password(password: str, *, rounds: int = 12) -> str:
    # bcrypt only considers the first 72 bytes.
    pw_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
