"""
Server-side verification of Google ID tokens.

The client signs in with Google and posts the resulting ID token; only the
claims of a token verified against GOOGLE_CLIENT_ID are trusted.
"""
import os
from typing import Any, Dict

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from utils.logger_factory import new_logger


class GoogleIdentityError(Exception):
    pass


class GoogleSignInNotConfigured(GoogleIdentityError):
    pass


def verify_google_id_token(token: str) -> Dict[str, Any]:
    """Return the verified claims of a Google ID token (email, email_verified, sub, name, picture)."""
    log = new_logger("verify_google_id_token")
    client_id = os.environ.get("GOOGLE_CLIENT_ID")
    if not client_id:
        log.error("GOOGLE_CLIENT_ID is not set, Google sign-in is disabled")
        raise GoogleSignInNotConfigured("Google sign-in is not configured on the server.")
    if not token:
        raise GoogleIdentityError("Google ID token is required.")

    try:
        claims = google_id_token.verify_oauth2_token(token, google_requests.Request(), client_id)
    except ValueError as e:
        # Bad signature, wrong audience, expired or malformed token
        log.warning(f"Rejected Google ID token: {e}")
        raise GoogleIdentityError("Invalid Google token.") from e

    if not claims.get("email") or not claims.get("email_verified"):
        log.warning(f"Google token for sub={claims.get('sub')} carries no verified email")
        raise GoogleIdentityError("Unverified Google email.")
    return claims
