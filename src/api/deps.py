"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt
from src.core.config import get_settings
from src.core.realtime import RealtimeHub
from src.schemas.auth import UserContext
from src.services.notification_service import NotificationService
from src.services.order_service import OrderService


async def get_current_user(
    authorization: Annotated[str, Header(description="Bearer token")] = "",
) -> UserContext:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (Bearer token).

    Returns:
        UserContext: The authenticated user's context.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_jwt(parts[1])
        return payload.to_user_context(admin_role=get_settings().admin_role)

    except AuthError as e:
        if e.code == AuthErrorCode.TOKEN_EXPIRED:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired",
                headers={"WWW-Authenticate": "Bearer"},
            ) from e

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def get_optional_user(
    authorization: Annotated[str | None, Header()] = None,
) -> UserContext | None:
    """Extract the current user if an Authorization header is present.

    A present but invalid token still raises 401.
    """
    if not authorization:
        return None
    return await get_current_user(authorization)


async def require_admin(
    user: Annotated[UserContext, Depends(get_current_user)],
) -> UserContext:
    """Require the authenticated user to hold the admin role.

    Raises:
        HTTPException: 403 if the user is not an admin.
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized as an admin",
        )
    return user


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[UserContext, Depends(get_current_user)]
OptionalUser = Annotated[UserContext | None, Depends(get_optional_user)]
AdminUser = Annotated[UserContext, Depends(require_admin)]


def get_realtime_hub(request: Request) -> RealtimeHub:
    """Return the hub owned by the running application."""
    return request.app.state.hub


def get_order_service(
    hub: Annotated[RealtimeHub, Depends(get_realtime_hub)],
) -> OrderService:
    """Build an OrderService wired to the application's hub."""
    return OrderService(publisher=hub, notifier=NotificationService(publisher=hub))


OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
