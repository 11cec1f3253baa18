"""Tests for the SQLite user store and credential helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from web.passwords import generate_reset_token, hash_password, hash_reset_token, verify_password
from web.tokens import InvalidTokenError, TokenService
from web.user_store import (
    EmailInUseError,
    create_user,
    find_user_by_reset_token,
    get_user_by_email,
    init_db,
    public_user,
    set_reset_token,
    update_password,
)


@pytest.fixture
def users_db(tmp_path):
    """Fresh users table for each test."""
    db_path = tmp_path / "users.db"
    init_db(db_path)
    return db_path


class TestUserStore:
    def test_create_and_get(self, users_db):
        user = create_user("a@test.com", "hash", db_path=users_db)
        found = get_user_by_email("a@test.com", db_path=users_db)
        assert found["id"] == user["id"]
        assert found["password"] == "hash"
        assert set(public_user(user)) == {"id", "email", "created_at"}

    def test_duplicate_email(self, users_db):
        create_user("a@test.com", "hash", db_path=users_db)
        with pytest.raises(EmailInUseError):
            create_user("a@test.com", "hash2", db_path=users_db)

    def test_missing_user(self, users_db):
        assert get_user_by_email("nobody@test.com", db_path=users_db) is None

    def test_reset_token_expiry(self, users_db):
        user = create_user("a@test.com", "hash", db_path=users_db)
        now = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)
        set_reset_token(user["id"], "tokhash", now + timedelta(minutes=30), db_path=users_db)

        assert find_user_by_reset_token("tokhash", now=now, db_path=users_db)["id"] == user["id"]
        later = now + timedelta(minutes=31)
        assert find_user_by_reset_token("tokhash", now=later, db_path=users_db) is None
        assert find_user_by_reset_token("wrong", now=now, db_path=users_db) is None

    def test_update_password_consumes_token(self, users_db):
        user = create_user("a@test.com", "hash", db_path=users_db)
        now = datetime.now(timezone.utc)
        set_reset_token(user["id"], "tokhash", now + timedelta(minutes=30), db_path=users_db)
        update_password(user["id"], "newhash", db_path=users_db)

        assert get_user_by_email("a@test.com", db_path=users_db)["password"] == "newhash"
        assert find_user_by_reset_token("tokhash", now=now, db_path=users_db) is None


class TestPasswords:
    def test_round_trip(self):
        stored = hash_password("correct horse")
        assert verify_password("correct horse", stored)
        assert not verify_password("wrong", stored)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    @pytest.mark.parametrize("stored", ["", "nocolon", "zz:zz", ":abcd"])
    def test_malformed_hash(self, stored):
        assert not verify_password("x", stored)

    def test_reset_token_pair(self):
        raw, digest = generate_reset_token()
        assert digest == hash_reset_token(raw)
        assert raw not in digest


class TestTokenService:
    def test_issue_and_verify(self):
        tokens = TokenService("secret")
        assert tokens.verify(tokens.issue(7)) == 7

    def test_expired(self):
        tokens = TokenService("secret", ttl_days=7)
        old = datetime.now(timezone.utc) - timedelta(days=8)
        with pytest.raises(InvalidTokenError):
            tokens.verify(tokens.issue(7, now=old))

    def test_wrong_secret(self):
        with pytest.raises(InvalidTokenError):
            TokenService("other").verify(TokenService("secret").issue(7))

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            TokenService("secret").verify("not.a.jwt")

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")
