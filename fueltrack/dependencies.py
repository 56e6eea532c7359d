from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from fueltrack.database import get_db
from fueltrack.models.user import User, RoleName
from fueltrack.services.notification_service import ConnectionManager
from fueltrack.services.trip_service import TripService
from fueltrack.utils.security import verify_access_token
from fueltrack.utils.exceptions import (
    UnauthorizedException,
    ForbiddenException,
    AccountInactiveException,
)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Token → User ─────────────────────────────────────────────────────────────
def user_from_token(db: Session, token: str) -> User:
    """
    Resolve an access token to an active User.
    Shared by the HTTP dependency below and the WebSocket handshake.
    """
    payload = verify_access_token(token)
    user_id = payload.get("sub")
    if user_id is None:
        raise UnauthorizedException("Invalid token payload")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise UnauthorizedException("User no longer exists")
    if not user.isActive:
        raise AccountInactiveException()
    return user


# ─── Get Current User ─────────────────────────────────────────────────────────
def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Validate JWT Bearer token and return the current User.
    Raises 401 if token is missing, invalid, or expired.
    Raises 403 if account is inactive.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")
    return user_from_token(db, credentials.credentials)


# ─── Role Guards ──────────────────────────────────────────────────────────────
def require_roles(*roles: RoleName):
    """
    Factory that returns a FastAPI dependency requiring one of the given roles.

    Usage:
        @router.get("/admin-only")
        def admin_route(current_user = Depends(require_roles(RoleName.ADMIN))):
            ...
    """
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenException(
                f"This action requires one of these roles: {[r.value for r in roles]}"
            )
        return current_user
    return dependency


def get_admin_user(current_user: User = Depends(require_roles(RoleName.ADMIN))) -> User:
    return current_user


# ─── Real-time ────────────────────────────────────────────────────────────────
def get_notifier(request: Request) -> ConnectionManager:
    """The process-wide ConnectionManager created in create_app()."""
    return request.app.state.notifier


def get_trip_service(notifier: ConnectionManager = Depends(get_notifier)) -> TripService:
    return TripService(notifier)
