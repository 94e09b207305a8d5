"""Bearer token signing and verification (PyJWT)"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from finance_tracker.config import settings


class InvalidTokenError(Exception):
    """Token is missing, malformed, expired or has no usable subject"""

    pass


def issue_token(user_id: uuid.UUID | str, role: str = "user", expires_in: timedelta | None = None) -> str:
    """Sign a token identifying a user; expires after settings.jwt_expires_days by default"""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + (expires_in if expires_in is not None else timedelta(days=settings.jwt_expires_days)),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> uuid.UUID:
    """
    Decode a token and return the user id it carries.

    Raises:
        InvalidTokenError: On bad signature, expiry or a non-UUID subject
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return uuid.UUID(payload["sub"])
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except (jwt.PyJWTError, KeyError, ValueError, TypeError) as e:
        raise InvalidTokenError("Invalid token") from e
