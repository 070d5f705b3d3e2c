from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone

from passlib.context import CryptContext

from pyrte.domain.errors import AuthError
from pyrte.domain.models import User

logger = logging.getLogger(__name__)

PBKDF2_ROUNDS = 240_000
MIN_PASSWORD_LENGTH = 6


def make_context(rounds: int = PBKDF2_ROUNDS) -> CryptContext:
    return CryptContext(
        schemes=["pbkdf2_sha256"], deprecated="auto", pbkdf2_sha256__default_rounds=rounds
    )


pwd_context = make_context()


def hash_password(password: str, *, context: CryptContext | None = None) -> str:
    """Encode as '$pbkdf2-sha256$<rounds>$<salt>$<checksum>'."""
    return (context or pwd_context).hash(password)


def verify_password(password: str, encoded: str, *, context: CryptContext | None = None) -> bool:
    try:
        return (context or pwd_context).verify(password, encoded)
    except (ValueError, TypeError):
        # unknown or malformed hash
        return False


class AuthService:
    """Local e-mail/password accounts stored next to the documents."""

    def __init__(self, conn: sqlite3.Connection, *, rounds: int = PBKDF2_ROUNDS) -> None:
        self._conn = conn
        self._context = make_context(rounds)

    def sign_up(self, email: str, password: str) -> User:
        email = self._check_input(email, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = User(id=str(uuid.uuid4()), email=email)
        encoded = hash_password(password, context=self._context)
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO users(id, email, password_hash, created_at) VALUES(?,?,?,?)",
                    (user.id, user.email, encoded, datetime.now(timezone.utc).isoformat()),
                )
        except sqlite3.IntegrityError as e:
            raise AuthError("An account with this email already exists") from e
        except sqlite3.Error as e:
            logger.error("Sign up failed: %s", e)
            raise AuthError("Could not create the account") from e
        logger.info("Created account %s", user.email)
        return user

    def sign_in(self, email: str, password: str) -> User:
        email = self._check_input(email, password)
        try:
            row = self._conn.execute(
                "SELECT id, email, password_hash FROM users WHERE email=?", (email,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.error("Sign in failed: %s", e)
            raise AuthError("Could not sign in") from e
        if row is None or not verify_password(password, row[2], context=self._context):
            raise AuthError("Invalid email or password")
        return User(id=row[0], email=row[1])

    @staticmethod
    def _check_input(email: str, password: str) -> str:
        email = (email or "").strip()
        if not email or not password:
            raise AuthError("Email and password are required")
        if "@" not in email:
            raise AuthError("Please enter a valid email address")
        return email
