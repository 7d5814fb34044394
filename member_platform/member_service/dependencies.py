"""
FastAPI dependencies shared by the routers.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth import Identity, TokenGuard
from .errors import AuthenticationError

# auto_error=False so a missing header produces our own error body
_bearer_scheme = HTTPBearer(auto_error=False)


def get_token_guard(request: Request) -> TokenGuard:
    return request.app.state.token_guard


def get_current_identity(
    guard: TokenGuard = Depends(get_token_guard),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Identity:
    """
    Extract and verify the Bearer token, returning the caller's identity.

    The identity lives only for the current request.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing or invalid authorization header")
    return guard.validate_token(credentials.credentials)
