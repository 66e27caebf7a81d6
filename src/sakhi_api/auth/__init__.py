"""
sakhi_api.auth

Authentication/authorization package.

Responsibilities:
- Signed credential issuing and verification (`TokenCodec`).
- FastAPI auth dependencies (the bearer gate producing an `Identity`).
- The single self-or-admin ownership policy used by every owned resource.
- Password hashing for the credential store.
"""

# Package marker.
