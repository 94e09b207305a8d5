"""Unit tests for bearer token handling"""

import uuid
import jwt
import pytest
from datetime import timedelta
from finance_tracker.config import settings
from finance_tracker.infrastructure.security.tokens import InvalidTokenError, issue_token, verify_token


def test_issue_and_verify():
    user_id = uuid.uuid4()

    assert verify_token(issue_token(user_id)) == user_id


def test_expired_token_rejected():
    token = issue_token(uuid.uuid4(), expires_in=timedelta(seconds=-1))

    with pytest.raises(InvalidTokenError, match="expired"):
        verify_token(token)


def test_wrong_secret_rejected():
    token = jwt.encode({"sub": str(uuid.uuid4())}, "some-other-secret-that-is-long-enough", algorithm=settings.jwt_algorithm)

    with pytest.raises(InvalidTokenError):
        verify_token(token)


def test_non_uuid_subject_rejected():
    token = jwt.encode({"sub": "12345"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    with pytest.raises(InvalidTokenError):
        verify_token(token)


def test_garbage_rejected():
    with pytest.raises(InvalidTokenError):
        verify_token("not-a-jwt")
