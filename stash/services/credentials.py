# stash/services/credentials.py
"""
Password hashing and bearer tokens.

Passwords are hashed with argon2id. Tokens are HS256 JWTs whose payload
embeds the user id as ``{"user": {"id": ...}}`` so the caller can be
resolved with a direct lookup.
"""
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from stash.domain.errors import Unauthenticated
from stash.utils.settings import JWT_SECRET, JWT_EXPIRES_IN

_ALGORITHM = "HS256"
_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(user_id: str, expires_in: int = JWT_EXPIRES_IN) -> str:
    payload = {
        "user": {"id": user_id},
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Returns the embedded user id, raises Unauthenticated for anything else."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[_ALGORITHM])
    except jwt.PyJWTError:
        raise Unauthenticated("Token is not valid")

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise Unauthenticated("Token is not valid")
    return str(user["id"])
