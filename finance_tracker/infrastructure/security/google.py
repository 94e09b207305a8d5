"""Google ID token verification for sign-in"""

from typing import Any, Dict

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import id_token as google_id_token

from finance_tracker.config import settings
from finance_tracker.infrastructure.security.tokens import InvalidTokenError


def verify_google_id_token(token: str, client_id: str | None = None) -> Dict[str, Any]:
    """
    Verify a Google-issued ID token and return its claims.

    Raises:
        InvalidTokenError: Bad signature, wrong audience, expired or unreachable certs
    """
    try:
        return google_id_token.verify_oauth2_token(token, Request(), client_id or settings.google_client_id)
    except (ValueError, GoogleAuthError) as e:
        raise InvalidTokenError("Invalid Google id token") from e
