"""
auth/store.py -- In-memory persistence layer for identities.

Pattern: Repository. CredentialStore owns the identity list; the service and
the route code never touch the list directly. The store is constructed once
in the app lifespan and passed explicitly -- there is no module-level user
list -- so every test gets its own isolated instance.

Concurrency:
  Sync route handlers run in a thread pool, so two signups can race. add()
  is the bare append (the caller checks uniqueness first). register() is the
  path signup uses: it re-checks email uniqueness and computes id = size + 1
  under a lock, so concurrent signups can neither share an email nor an id.
  The lock is never held while hashing.

Lifetime: process memory only. Everything is lost on restart.

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from auth.errors import EmailTaken
from auth.models import ROLE_ADMIN, ROLE_USER, Identity, PublicIdentity

if TYPE_CHECKING:
    from auth.passwords import PasswordHasher

logger = logging.getLogger("usermgmt.auth.store")

# (username, email, password, role) -- the two accounts present at startup.
SEED_ACCOUNTS: tuple[tuple[str, str, str, str], ...] = (
    ("AdminUser", "admin@example.com", "admin123", ROLE_ADMIN),
    ("RegularUser", "user@example.com", "user123", ROLE_USER),
)


class CredentialStore:
    """Repository for Identity records.

    Usage:
        store = CredentialStore()
        store.seed(PasswordHasher())
        identity = store.find_by_email("admin@example.com")
    """

    def __init__(self) -> None:
        self._identities: list[Identity] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._identities)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_email(self, email: str) -> Identity | None:
        """Look up an identity by exact email (case-sensitive). Returns None if not found."""
        for identity in self._identities:
            if identity.email == email:
                return identity
        return None

    def list_public(self) -> list[PublicIdentity]:
        """Return every identity without its password hash, in creation order."""
        return [
            PublicIdentity(id=i.id, username=i.username, email=i.email, role=i.role)
            for i in self._identities
        ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, identity: Identity) -> None:
        """Append an identity as-is.

        No uniqueness check happens here. Callers must have checked
        find_by_email() first; signup uses register() instead.
        """
        with self._lock:
            self._identities.append(identity)

    def register(self, username: str, email: str, password_hash: str) -> Identity:
        """Create a self-registered identity and append it atomically.

        Role is always "user" -- signup never lets the caller choose it.
        Raises EmailTaken if the email was claimed between the caller's
        check and this call.
        """
        with self._lock:
            if self.find_by_email(email) is not None:
                raise EmailTaken()
            identity = Identity(
                id=len(self._identities) + 1,
                username=username,
                email=email,
                password_hash=password_hash,
                role=ROLE_USER,
            )
            self._identities.append(identity)
        return identity

    def seed(self, hasher: PasswordHasher) -> None:
        """Populate the fixed startup accounts. No-op on a non-empty store."""
        if self._identities:
            return
        for username, email, password, role in SEED_ACCOUNTS:
            self.add(
                Identity(
                    id=len(self._identities) + 1,
                    username=username,
                    email=email,
                    password_hash=hasher.hash(password),
                    role=role,
                )
            )
        logger.info("Seeded %d accounts", len(self._identities))
