"""/v1/auth - Google sign-in and logout"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import AuthResponse, GoogleAuthRequest, MessageResponse, UserInfo
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import UserRepository
from finance_tracker.infrastructure.security.google import verify_google_id_token
from finance_tracker.infrastructure.security.tokens import InvalidTokenError, issue_token

router = APIRouter()

GOOGLE = "google"


@router.post("/auth/google", response_model=AuthResponse)
def google_sign_in(body: GoogleAuthRequest, db: Session = Depends(get_db)):
    """
    Exchange a Google ID token for an API bearer token.

    Flow:
    1. Verify the ID token against the configured client id
    2. Find the user by Google subject, or create it on first sign-in
    3. Refresh email/name/avatar if they changed on the Google side
    4. Return a signed token and minimal user info
    """
    if not body.id_token:
        raise HTTPException(status_code=400, detail="idToken is required")

    try:
        claims = verify_google_id_token(body.id_token)
    except InvalidTokenError as e:
        logging.warning(f"Google sign-in rejected: {e}", extra={"step": "google_sign_in"})
        raise HTTPException(status_code=401, detail=str(e))

    profile = {
        "email": claims.get("email", ""),
        "name": claims.get("name") or claims.get("given_name") or "Google User",
        "avatar_url": claims.get("picture"),
    }

    repo = UserRepository(db)
    user = repo.get_by_auth(GOOGLE, claims["sub"])
    if user is None:
        user = repo.create(auth_provider=GOOGLE, auth_id=claims["sub"], role="user", **profile)
    else:
        changes = {key: value for key, value in profile.items() if getattr(user, key) != value}
        if changes:
            repo.update(user, **changes)
    db.commit()

    return AuthResponse(
        token=issue_token(user.id, user.role),
        user=UserInfo(id=str(user.id), email=user.email, name=user.name, role=user.role),
    )


@router.post("/auth/logout", response_model=MessageResponse)
def logout():
    """Tokens are stateless; the client discards its copy"""
    return MessageResponse(message="Logged out successfully")
