"""
Password hashing and bearer token handling.

Tokens are signed, timestamped payloads carrying the user id. They are
not stored server-side; expiry is enforced on verification.
"""

import logging

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ptcgvault.config import settings

logger = logging.getLogger(__name__)

TOKEN_SALT = "ptcgvault-auth-token"


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, tampered with, or expired."""


def hash_password(raw_password: str) -> str:
    return generate_password_hash(raw_password)


def verify_password(password_hash: str | None, raw_password: str | None) -> bool:
    if not password_hash or not raw_password:
        return False
    return check_password_hash(password_hash, raw_password)


def _serializer(secret_key: str | None = None) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key or settings.secret_key, salt=TOKEN_SALT)


def issue_token(user_id: int, secret_key: str | None = None) -> str:
    """Create a signed token for a user."""
    return _serializer(secret_key).dumps({"user_id": user_id})


def verify_token(
    token: str,
    max_age: int | None = None,
    secret_key: str | None = None,
) -> int:
    """
    Return the user id encoded in a token.

    Raises:
        InvalidTokenError: If the token is expired, tampered with, or malformed
    """
    if max_age is None:
        max_age = settings.token_max_age_seconds

    try:
        payload = _serializer(secret_key).loads(token, max_age=max_age)
    except SignatureExpired as e:
        raise InvalidTokenError("Token expired") from e
    except BadSignature as e:
        logger.warning("Rejected bearer token with bad signature")
        raise InvalidTokenError("Invalid token") from e

    user_id = payload.get("user_id") if isinstance(payload, dict) else None
    if not isinstance(user_id, int):
        raise InvalidTokenError("Invalid token payload")
    return user_id
