"""
FastAPI dependencies for authentication and authorization.

A bearer token is optional on every request. When present and valid, its
claims describe the caller. Handlers that mutate data add `ensure_admin`
to their dependencies; routers built with `AdminFirstRoute` run that check
before the request body is read, so a bad body never hides a 401 or 403.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Optional

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.errors import ForbiddenError, UnauthorizedError
from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); missing header is not an error here
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    username: str
    is_admin: bool = False


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Extract the caller from the bearer token, if any.

    Returns None for a missing, malformed or expired token; deciding whether
    that is acceptable is left to `ensure_logged_in` / `ensure_admin`.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Ignoring invalid bearer token: {e}")
        return None

    username = payload.get("username")
    if not username:
        return None

    return CurrentUser(username=username, is_admin=bool(payload.get("isAdmin", False)))


def ensure_logged_in(user: Optional[CurrentUser] = Depends(get_current_user)) -> CurrentUser:
    """
    Raises:
        UnauthorizedError 401: If no valid token was supplied
    """
    if user is None:
        raise UnauthorizedError()
    return user


def ensure_admin(user: CurrentUser = Depends(ensure_logged_in)) -> CurrentUser:
    """
    Require an admin caller.

    Raises:
        UnauthorizedError 401: If no valid token was supplied
        ForbiddenError 403: If the caller is not an admin
    """
    if not user.is_admin:
        logger.info(f"Denied admin-only request for user {user.username}")
        raise ForbiddenError("Admin privileges required")
    return user


class AdminFirstRoute(APIRoute):
    """
    Route class that authorizes admin-only routes before FastAPI parses the body.

    Routes without `ensure_admin` among their dependencies are left unchanged.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        if not any(dep.call is ensure_admin for dep in self.dependant.dependencies):
            return handler

        async def authorize_then_handle(request: Request) -> Response:
            credentials = await security(request)
            ensure_admin(ensure_logged_in(get_current_user(credentials)))
            return await handler(request)

        return authorize_then_handle
