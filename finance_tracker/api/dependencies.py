"""Dependency injection for FastAPI endpoints"""

import uuid
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import sessionmaker

from finance_tracker.infrastructure.database.repositories import SqlReportStore
from finance_tracker.infrastructure.database.session import get_session_factory
from finance_tracker.infrastructure.security.tokens import InvalidTokenError, verify_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> uuid.UUID:
    """Resolve the bearer token into the caller's user id"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication required", headers={"WWW-Authenticate": "Bearer"})
    try:
        return verify_token(credentials.credentials)
    except InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})


def get_report_store(session_factory: sessionmaker = Depends(get_session_factory)) -> SqlReportStore:
    """Provide report storage reads"""
    return SqlReportStore(session_factory)


def parse_uuid(value: str, label: str) -> uuid.UUID:
    """Parse a path/body identifier, answering 400 when it is not a UUID"""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")
