"""
auth/session.py -- The per-visitor session slot.

Starlette's SessionMiddleware keeps a signed cookie and exposes its contents
as request.session, a plain dict. SessionSlot wraps that mapping so the auth
service only ever sees get/set/clear and a typed Session, never the cookie.

The slot holds one key, "user", whose value is the JSON-able form of the
Session snapshot. Anything else found under that key (a tampered or stale
payload that still carried a valid signature) reads as "no session".

Layer rule: no imports from api/, web/, or core/.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from auth.errors import SessionTeardownFailed
from auth.models import ROLES, Session

SESSION_KEY = "user"


class SessionSlot:
    def __init__(self, data: MutableMapping[str, Any]) -> None:
        self._data = data

    def get(self) -> Session | None:
        raw = self._data.get(SESSION_KEY)
        if not isinstance(raw, dict):
            return None
        try:
            session = Session(id=int(raw["id"]), username=str(raw["username"]), role=str(raw["role"]))
        except (KeyError, TypeError, ValueError):
            return None
        if session.role not in ROLES:
            return None
        return session

    def set(self, session: Session) -> None:
        self._data[SESSION_KEY] = {"id": session.id, "username": session.username, "role": session.role}

    def clear(self) -> None:
        """Drop everything in the slot. Clearing an empty slot is a no-op."""
        try:
            self._data.clear()
        except Exception as exc:
            raise SessionTeardownFailed() from exc
