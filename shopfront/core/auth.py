# shopfront/core/auth.py
from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shopfront.core.config import Settings
from shopfront.core.errors import AuthError
from shopfront.core.security import InvalidTokenError, verify_token

# HTTP Bearer scheme:
# - auto_error=False => a missing header returns None instead of raising
#   FastAPI's own 403, so we can answer with our 401 error envelope.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and verify an access token (signature + exp).

    Raises:
        AuthError(401): if token is invalid/expired.
    """
    try:
        return verify_token(token, settings.jwt_secret, algorithm=settings.JWT_ALG)
    except InvalidTokenError:
        raise AuthError("Token is invalid or expired", error="Invalid token")


def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """
    Enforce authentication on a route.

    Flow:
      1. No "Authorization: Bearer <token>" header => 401 (token not provided).
      2. Signature/expiry check fails => 401 (invalid token).
      3. Otherwise return the decoded claims {id, email, exp}.

    Any valid token authorizes every protected route; there are no roles.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Authorization: Bearer <token> header is required", error="Token not provided")

    return decode_access_token(credentials.credentials, settings)
