"""
auth/passwords.py -- Password hashing and verification.

Security design decisions:
  bcrypt, used directly (no passlib wrapper). Its cost factor makes each hash
  deliberately expensive, which slows brute-force attempts against low-entropy
  secrets. The deployed cost is 10; the value is carried on the hasher so the
  store, the service and the tests all agree on it.

  verify() never raises. A malformed stored hash, a password bcrypt refuses,
  or any other primitive failure is reported as "no match" -- the visitor sees
  the same InvalidCredentials as for a wrong password.

  dummy_hash is computed once per hasher at the configured cost. The service
  verifies against it when an email is unknown so response time does not
  reveal whether the account exists.

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

import logging

import bcrypt

from auth.errors import HashingError

logger = logging.getLogger("usermgmt.auth")

DEFAULT_COST = 10


class PasswordHasher:
    """Salted one-way hashing with a fixed work factor.

    Usage:
        hasher = PasswordHasher(cost=10)
        hashed = hasher.hash("s3cret")
        hasher.verify("s3cret", hashed)   # True
    """

    def __init__(self, cost: int = DEFAULT_COST) -> None:
        self.cost = cost
        self.dummy_hash: str = self.hash("usermgmt_timing_dummy")

    def hash(self, plain: str) -> str:
        """Return a salted bcrypt hash of plain.

        Raises HashingError if bcrypt rejects the input (bcrypt refuses
        passwords longer than 72 bytes and passwords containing NUL bytes).
        """
        try:
            return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=self.cost)).decode("utf-8")
        except (TypeError, ValueError) as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, plain: str, hashed: str) -> bool:
        """Return True if plain matches hashed. Any primitive failure is a mismatch."""
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
        except (TypeError, ValueError) as exc:
            logger.debug("Password verification fault treated as mismatch: %s", exc)
            return False
