"""
sakhi_api.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for the persistence layer.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; authorization decisions belong to `auth.policy`
# and are applied by the routers after a record has been loaded.
