"""
Shared route dependencies: token extraction, active-token and admin checks.
"""
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status
from messenger.core.security import TokenData, decode_access_token
from messenger.core.token_registry import TokenRegistry

BEARER_PREFIX = "bearer "


def get_token_registry(request: Request) -> TokenRegistry:
    """Registry instance owned by the running application."""
    return request.app.state.token_registry


def get_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Raw token from the Authorization header; an optional Bearer prefix is stripped."""
    if not authorization:
        return None
    token = authorization.strip()
    if token.lower().startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()
    return token or None


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated"
    )


async def get_current_token(
    token: Optional[str] = Depends(get_token),
    registry: TokenRegistry = Depends(get_token_registry)
) -> TokenData:
    """Claims of a logged-in, validly signed and unexpired token."""
    if not token or not registry.contains(token):
        raise _unauthorized()

    token_data = decode_access_token(token)
    if token_data is None:
        raise _unauthorized()
    return token_data


async def get_current_admin(
    current: TokenData = Depends(get_current_token)
) -> TokenData:
    """Same as get_current_token, additionally requiring the admin claim."""
    if not current.is_admin:
        raise _unauthorized()
    return current
