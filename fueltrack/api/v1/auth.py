from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fueltrack.database import get_db
from fueltrack.dependencies import get_current_user
from fueltrack.models.user import User
from fueltrack.schemas.auth import (
    LoginRequest, RegisterRequest, RefreshTokenRequest,
    LogoutRequest, ChangePasswordRequest,
)
from fueltrack.schemas.common import SuccessResponse, success_response
from fueltrack.services.auth_service import auth_service, serialize_user

router = APIRouter(prefix="/auth")


# ─── POST /auth/register ──────────────────────────────────────────────────────
@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
    response_model=SuccessResponse,
)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Creates a dashboard operator account (role `user`) whatever role the body
    asks for. Admins come from `fueltrack.seed` or `POST /users`.
    """
    user = auth_service.register(db, data)
    return success_response("Registration successful", serialize_user(user))


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login and receive access + refresh tokens",
    response_model=SuccessResponse,
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    result = auth_service.login(db, data)
    return success_response("Login successful", result)


# ─── POST /auth/refresh ───────────────────────────────────────────────────────
@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    summary="Get new access token using refresh token",
    response_model=SuccessResponse,
)
def refresh_token(data: RefreshTokenRequest, db: Session = Depends(get_db)):
    result = auth_service.refresh_token(db, data.refreshToken)
    return success_response("Token refreshed", result)


# ─── POST /auth/logout ────────────────────────────────────────────────────────
@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Revoke refresh token (logout)",
    response_model=SuccessResponse,
)
def logout(
    data: LogoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Revokes the refresh token; already-open `/ws` connections are not closed."""
    auth_service.logout(db, data.refreshToken, current_user.id)
    return success_response("Logged out successfully", None)


# ─── PATCH /auth/change-password ──────────────────────────────────────────────
@router.patch(
    "/change-password",
    status_code=status.HTTP_200_OK,
    summary="Change password (requires current password, authenticated)",
    response_model=SuccessResponse,
)
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    auth_service.change_password(db, data, current_user)
    return success_response("Password changed successfully.", None)


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get current authenticated user",
    response_model=SuccessResponse,
)
def me(current_user: User = Depends(get_current_user)):
    return success_response("Profile retrieved", serialize_user(current_user))
