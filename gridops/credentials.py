"""
gridops/credentials.py

Credential store: username -> bcrypt hash.

Hashing is the one deliberately slow step in the service. It always runs
before a connection is written to, so no transaction or lock is held while
bcrypt works. Plaintext passwords are never stored or printed.
"""

from __future__ import annotations

import sqlite3

import bcrypt

from gridops import config
from gridops.db import new_id, now_iso, transaction
from gridops.errors import DuplicateUsername, InvalidCredentials, ValidationFailure
from gridops.models import User


def hash_password(plain_password: str) -> str:
    """
    Hash a plain-text password with bcrypt (BCRYPT_ROUNDS rounds).

    Raises:
        ValidationFailure: password longer than PASSWORD_MAX_BYTES
    """
    encoded = plain_password.encode("utf-8")
    if len(encoded) > config.PASSWORD_MAX_BYTES:
        raise ValidationFailure(f"password longer than {config.PASSWORD_MAX_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Constant-time check of a plain-text password against a bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash, or a password bcrypt refuses
        return False


# Compared against when the username is unknown, so both failure paths cost one bcrypt check.
# Built at import so the first unknown-user sign-in is not slower than the rest.
_DUMMY_HASH: str = hash_password("gridops-dummy-password")


def register(conn: sqlite3.Connection, username: str, password: str) -> User:
    """
    Create a user with a freshly salted hash.

    Raises:
        DuplicateUsername: username already taken (case-sensitive match)
    """
    pw_hash = hash_password(password)
    user_id = new_id()
    created_at = now_iso()

    with transaction(conn, label="register"):
        try:
            conn.execute(
                "INSERT INTO users (id, username, password_hash, created_at) VALUES (?, ?, ?, ?)",
                (user_id, username, pw_hash, created_at),
            )
        except sqlite3.IntegrityError:
            # username is the only unique column besides the generated id
            raise DuplicateUsername("username already registered")

    if config.IS_DEV:
        print(f"[USERS] Registered user_id={user_id}")
    return User(id=user_id, username=username, created_at=created_at)


def verify(conn: sqlite3.Connection, username: str, password: str) -> User:
    """
    Return the user for valid credentials.

    Raises:
        InvalidCredentials: unknown username or wrong password (indistinguishable)
    """
    row = conn.execute(
        "SELECT id, username, password_hash, created_at FROM users WHERE username = ?",
        (username,),
    ).fetchone()

    if row is None:
        verify_password(password, _DUMMY_HASH)
        if config.IS_DEV:
            print("[USERS] Sign-in rejected")
        raise InvalidCredentials()

    if not verify_password(password, row["password_hash"]):
        if config.IS_DEV:
            print("[USERS] Sign-in rejected")
        raise InvalidCredentials()

    return User(id=row["id"], username=row["username"], created_at=row["created_at"])
