"""Unit tests for auth/passwords.py -- bcrypt hashing and fault collapse.

Covers:
- hash() produces a salted bcrypt hash at the configured cost
- verify() round-trip: right password True, wrong password False
- verify() collapses a malformed stored hash to False instead of raising
- hash() wraps primitive failures in HashingError
"""

import bcrypt
import pytest

from auth.errors import HashingError
from auth.passwords import DEFAULT_COST, PasswordHasher


def test_default_cost_is_ten():
    assert DEFAULT_COST == 10
    hasher = PasswordHasher()
    hashed = hasher.hash("admin123")
    # bcrypt encodes the cost in the hash prefix: $2b$10$...
    assert hashed.split("$")[2] == "10"
    assert hasher.verify("admin123", hashed) is True


def test_hash_is_salted(hasher):
    first = hasher.hash("pw123")
    second = hasher.hash("pw123")
    assert first != second
    assert hasher.verify("pw123", first)
    assert hasher.verify("pw123", second)


def test_hash_never_contains_plaintext(hasher):
    assert "pw123" not in hasher.hash("pw123")


@pytest.mark.parametrize("plain", ["pw123", "admin123", "päss wörd", " leading-space"])
def test_verify_round_trip(hasher, plain):
    hashed = hasher.hash(plain)
    assert hasher.verify(plain, hashed) is True
    assert hasher.verify(plain + "x", hashed) is False


def test_verify_wrong_password(hasher):
    assert hasher.verify("wrong", hasher.hash("admin123")) is False


@pytest.mark.parametrize("bad_hash", ["", "not-a-bcrypt-hash", "$2b$10$tooshort"])
def test_verify_malformed_hash_is_mismatch(hasher, bad_hash):
    assert hasher.verify("admin123", bad_hash) is False


def test_dummy_hash_matches_configured_cost(hasher):
    assert hasher.dummy_hash.split("$")[2] == "04"
    assert hasher.verify("anything", hasher.dummy_hash) is False


def test_hash_failure_raises_hashing_error(hasher, monkeypatch):
    def _boom(password, salt):
        raise ValueError("rejected by primitive")

    monkeypatch.setattr(bcrypt, "hashpw", _boom)
    with pytest.raises(HashingError):
        hasher.hash("pw123")


def test_verify_primitive_failure_is_mismatch(hasher, monkeypatch):
    hashed = hasher.hash("pw123")

    def _boom(password, hashed_password):
        raise ValueError("Invalid salt")

    monkeypatch.setattr(bcrypt, "checkpw", _boom)
    assert hasher.verify("pw123", hashed) is False
