"""Unit tests for password hashing utilities."""

import pytest
from argon2 import PasswordHasher

from gulita.core.exceptions import ComparisonError, HashingError
from gulita.infrastructure.auth.password_hasher import (
    dummy_password_hash,
    hash_password,
    needs_rehash,
    verify_password,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_returns_argon2_hash(self):
        hashed = hash_password("SecureP@ss123!")

        assert hashed.startswith("$argon2id$")
        assert "SecureP@ss123!" not in hashed

    def test_hash_password_different_for_same_input(self):
        """Hashing the same password twice gives different hashes (random salt)."""
        assert hash_password("SecureP@ss123!") != hash_password("SecureP@ss123!")

    def test_hash_password_empty_raises(self):
        with pytest.raises(HashingError):
            hash_password("")


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_password_correct(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password("SecureP@ss123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password("WrongPassword", hashed) is False

    def test_verify_password_case_sensitive(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password("securep@ss123!", hashed) is False

    def test_verify_password_with_special_characters(self):
        password = "P@ssw0rd!#$%^&*()ü"
        assert verify_password(password, hash_password(password)) is True

    @pytest.mark.parametrize(("password", "hashed"), [("", "$argon2id$x"), ("secret", "")])
    def test_verify_password_missing_argument_raises(self, password, hashed):
        with pytest.raises(ComparisonError):
            verify_password(password, hashed)

    def test_verify_password_malformed_hash_raises(self):
        with pytest.raises(ComparisonError):
            verify_password("secret123", "not-a-hash")


class TestNeedsRehash:
    def test_current_parameters_do_not_need_rehash(self):
        assert needs_rehash(hash_password("SecureP@ss123!")) is False

    def test_different_parameters_need_rehash(self):
        stronger = PasswordHasher(time_cost=2, memory_cost=16, parallelism=1)

        assert needs_rehash(stronger.hash("SecureP@ss123!")) is True


def test_dummy_password_hash_is_stable_and_valid():
    assert dummy_password_hash() is dummy_password_hash()
    assert verify_password("anything-else", dummy_password_hash()) is False
