"""
auth/service.py -- Credential verification and session issuance.

AuthService is the core of the application. It sits between the routing
layers (api/ and web/) and the CredentialStore / PasswordHasher pair, and
drives a two-state machine over a single visitor's SessionSlot:

  Anonymous     --login / signup-->  Authenticated
  Authenticated --logout-------->    Anonymous

The slot is always passed in explicitly; the service holds no per-visitor
state of its own.

Security:
  login() always runs bcrypt, against a dummy hash when the email is unknown,
  so neither the error text nor the response time tells an attacker whether
  the account exists.

  signup() does reveal that an email is taken (EmailTaken). The login side
  and the signup side are therefore not symmetric about enumeration; this is
  the product behaviour and is left as-is.

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

import logging

from auth.errors import EmailTaken, HashingError, InvalidCredentials, SignupFailed, Unauthenticated
from auth.models import Identity, LandingView, Session
from auth.passwords import PasswordHasher
from auth.session import SessionSlot
from auth.store import CredentialStore

logger = logging.getLogger("usermgmt.auth")


def _snapshot(identity: Identity) -> Session:
    return Session(id=identity.id, username=identity.username, role=identity.role)


class AuthService:
    """Orchestrates login, signup, logout and the landing projection.

    Usage:
        service = AuthService(store, hasher)
        session = service.login(SessionSlot(request.session), email, password)
    """

    def __init__(self, store: CredentialStore, hasher: PasswordHasher) -> None:
        self.store = store
        self.hasher = hasher

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def login(self, slot: SessionSlot, email: str, password: str) -> Session:
        """Verify credentials and store a Session snapshot in the slot.

        Raises InvalidCredentials for an unknown email, a wrong password, or
        a hasher fault -- the three are indistinguishable to the caller. The
        slot is left untouched on failure.
        """
        identity = self.store.find_by_email(email)
        if identity is None:
            # Equalize timing -- do NOT return before running bcrypt
            self.hasher.verify(password, self.hasher.dummy_hash)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentials()
        if not self.hasher.verify(password, identity.password_hash):
            logger.warning("Login failed for user %d: password mismatch", identity.id)
            raise InvalidCredentials()

        session = _snapshot(identity)
        slot.set(session)
        logger.info("User %d (%s) logged in", session.id, session.role)
        return session

    def signup(self, slot: SessionSlot, email: str, username: str, password: str) -> Session:
        """Register a new "user" identity and log it in.

        Raises EmailTaken if the email already exists (checked before hashing
        and again atomically inside the store), SignupFailed if hashing fails.
        """
        if self.store.find_by_email(email) is not None:
            logger.warning("Signup rejected: email already taken")
            raise EmailTaken()
        try:
            password_hash = self.hasher.hash(password)
        except HashingError as exc:
            logger.warning("Signup failed: %s", exc)
            raise SignupFailed() from exc

        identity = self.store.register(username=username, email=email, password_hash=password_hash)
        session = _snapshot(identity)
        slot.set(session)
        logger.info("User %d signed up", identity.id)
        return session

    def logout(self, slot: SessionSlot) -> None:
        """Clear the slot unconditionally. Raises SessionTeardownFailed on a slot fault."""
        session = slot.get()
        slot.clear()
        if session is not None:
            logger.info("User %d logged out", session.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current(self, slot: SessionSlot) -> Session | None:
        return slot.get()

    def view_for(self, session: Session) -> LandingView:
        """Admins see every identity (without hashes); users see only themselves."""
        if session.is_admin:
            return LandingView(session=session, identities=self.store.list_public())
        return LandingView(session=session)

    def landing(self, slot: SessionSlot) -> LandingView:
        """Project the landing view for the visitor. Raises Unauthenticated when anonymous."""
        session = slot.get()
        if session is None:
            raise Unauthenticated()
        return self.view_for(session)
