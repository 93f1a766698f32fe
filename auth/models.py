"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Dataclasses own the
domain shape; the store and the service do the work.

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)


@dataclass(frozen=True)
class Identity:
    """A stored account record.

    email is the lookup key and is unique across the store. id is assigned by
    the store at creation time (size + 1). Identities are never updated or
    deleted, hence frozen.
    """

    id: int
    username: str
    email: str
    password_hash: str
    role: str = ROLE_USER  # "admin" | "user"


@dataclass(frozen=True)
class PublicIdentity:
    """An Identity without its password hash -- the only shape that is rendered."""

    id: int
    username: str
    email: str
    role: str


@dataclass(frozen=True)
class Session:
    """Per-visitor snapshot of the authenticated Identity.

    Copied from the Identity at login/signup time, not a reference to it.
    """

    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class LandingView:
    """Read projection for the landing page.

    identities is None for regular users; admins get every identity.
    """

    session: Session
    identities: list[PublicIdentity] | None = None
