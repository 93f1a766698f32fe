"""Unit tests for auth/store.py -- the in-memory CredentialStore.

Covers:
- seed() creates the admin and regular accounts with working hashes; idempotent
- find_by_email() is exact and case-sensitive
- add() appends without uniqueness checks (caller's responsibility)
- register() forces role "user", assigns size+1 ids, rejects taken emails
- register() under concurrent signups never produces duplicate ids or emails
- list_public() never exposes password hashes
"""

import threading

import pytest

from auth.errors import EmailTaken
from auth.models import Identity, PublicIdentity
from auth.store import SEED_ACCOUNTS, CredentialStore


def test_seed_creates_two_fixed_accounts(store, hasher):
    assert len(store) == 2
    admin = store.find_by_email("admin@example.com")
    user = store.find_by_email("user@example.com")
    assert admin is not None and user is not None
    assert (admin.id, admin.username, admin.role) == (1, "AdminUser", "admin")
    assert (user.id, user.username, user.role) == (2, "RegularUser", "user")
    assert hasher.verify("admin123", admin.password_hash)
    assert hasher.verify("user123", user.password_hash)


def test_seed_is_idempotent(store, hasher):
    store.seed(hasher)
    assert len(store) == len(SEED_ACCOUNTS)


def test_find_by_email_missing_returns_none(store):
    assert store.find_by_email("nobody@example.com") is None


def test_find_by_email_is_case_sensitive(store):
    assert store.find_by_email("Admin@Example.com") is None


def test_add_appends_without_uniqueness_check(hasher):
    s = CredentialStore()
    s.add(Identity(id=1, username="a", email="dup@example.com", password_hash=hasher.hash("x")))
    s.add(Identity(id=2, username="b", email="dup@example.com", password_hash=hasher.hash("y")))
    assert len(s) == 2
    # First match wins on lookup
    assert s.find_by_email("dup@example.com").username == "a"


def test_register_assigns_next_id_and_user_role(store, hasher):
    identity = store.register(username="Newbie", email="new@example.com", password_hash=hasher.hash("pw123"))
    assert identity.id == 3
    assert identity.role == "user"
    assert store.find_by_email("new@example.com") == identity


def test_register_rejects_taken_email(store, hasher):
    with pytest.raises(EmailTaken):
        store.register(username="X", email="admin@example.com", password_hash=hasher.hash("pw"))
    assert len(store) == 2


def test_emails_unique_after_sequential_signups(store, hasher):
    pw_hash = hasher.hash("pw")
    for i in range(5):
        store.register(username=f"u{i}", email=f"u{i}@example.com", password_hash=pw_hash)
    emails = [i.email for i in store.list_public()]
    assert len(emails) == len(set(emails)) == 7
    for email in emails:
        assert store.find_by_email(email) is not None


def test_concurrent_register_yields_unique_ids(hasher):
    s = CredentialStore()
    pw_hash = hasher.hash("pw")
    barrier = threading.Barrier(16)
    errors: list[Exception] = []

    def _signup(n: int) -> None:
        barrier.wait()
        try:
            s.register(username=f"u{n}", email=f"u{n}@example.com", password_hash=pw_hash)
        except Exception as exc:  # pragma: no cover - surfaced via the assert below
            errors.append(exc)

    threads = [threading.Thread(target=_signup, args=(n,)) for n in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    ids = sorted(i.id for i in s.list_public())
    assert ids == list(range(1, 17))


def test_concurrent_register_same_email_only_one_wins(hasher):
    s = CredentialStore()
    pw_hash = hasher.hash("pw")
    barrier = threading.Barrier(8)
    taken: list[EmailTaken] = []

    def _signup(n: int) -> None:
        barrier.wait()
        try:
            s.register(username=f"u{n}", email="same@example.com", password_hash=pw_hash)
        except EmailTaken as exc:
            taken.append(exc)

    threads = [threading.Thread(target=_signup, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(s) == 1
    assert len(taken) == 7


def test_list_public_hides_password_hashes(store):
    rows = store.list_public()
    assert [r.email for r in rows] == ["admin@example.com", "user@example.com"]
    assert all(isinstance(r, PublicIdentity) for r in rows)
    assert all(not hasattr(r, "password_hash") for r in rows)
