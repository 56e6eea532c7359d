from sqlalchemy.orm import Session

from fueltrack.config import settings
from fueltrack.models.user import User, RoleName
from fueltrack.models.refresh_token import RefreshToken
from fueltrack.schemas.auth import LoginRequest, RegisterRequest, ChangePasswordRequest
from fueltrack.utils.security import (
    verify_password, hash_password,
    create_access_token, create_refresh_token, verify_refresh_token,
)
from fueltrack.utils.audit import log_action
from fueltrack.utils.clock import as_utc, utcnow
from fueltrack.utils.exceptions import (
    UnauthorizedException, AccountInactiveException,
    DuplicateEntryException, RefreshTokenInvalidException,
)


def serialize_user(u: User) -> dict:
    return {
        "id":       u.id,
        "username": u.username,
        "role":     u.role.value,
        "isActive": u.isActive,
    }


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        user = db.query(User).filter(User.username == data.username).first()

        if not user or not verify_password(data.password, user.password):
            raise UnauthorizedException("Invalid username or password")

        if not user.isActive:
            raise AccountInactiveException()

        access_token = create_access_token(user.id, user.role.value)
        refresh_token_str, refresh_expires = create_refresh_token(user.id)

        db.add(RefreshToken(
            userId=user.id,
            token=refresh_token_str,
            expiresAt=refresh_expires,
            revoked=False,
        ))
        log_action(db, user.id, "LOGIN", "User", user.id, f"{user.username} logged in")
        db.commit()

        return {
            "accessToken":  access_token,
            "refreshToken": refresh_token_str,
            "tokenType":    "Bearer",
            "expiresIn":    settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user":         serialize_user(user),
        }

    # ─── Refresh Token ────────────────────────────────────────────────────────
    def refresh_token(self, db: Session, refresh_token_str: str) -> dict:
        payload = verify_refresh_token(refresh_token_str)
        user_id = int(payload.get("sub"))

        stored = db.query(RefreshToken).filter(
            RefreshToken.token == refresh_token_str,
            RefreshToken.userId == user_id,
            RefreshToken.revoked == False,
        ).first()
        if not stored:
            raise RefreshTokenInvalidException()

        if as_utc(stored.expiresAt) < utcnow():
            stored.revoked = True
            db.commit()
            raise RefreshTokenInvalidException()

        user = db.query(User).filter(User.id == user_id).first()
        if not user or not user.isActive:
            raise AccountInactiveException()

        return {
            "accessToken": create_access_token(user.id, user.role.value),
            "expiresIn":   settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        }

    # ─── Logout ───────────────────────────────────────────────────────────────
    def logout(self, db: Session, refresh_token_str: str, user_id: int) -> None:
        stored = db.query(RefreshToken).filter(
            RefreshToken.token == refresh_token_str,
            RefreshToken.userId == user_id,
        ).first()
        if stored:
            stored.revoked = True

        log_action(db, user_id, "LOGOUT", "User", user_id, "User logged out")
        db.commit()

    # ─── Register ─────────────────────────────────────────────────────────────
    def register(self, db: Session, data: RegisterRequest) -> User:
        if db.query(User).filter(User.username == data.username).first():
            raise DuplicateEntryException("Username already exists", field="username")

        # Self-registration never grants admin
        user = User(
            username=data.username,
            password=hash_password(data.password),
            role=RoleName.USER,
            isActive=True,
        )
        db.add(user)
        db.flush()

        log_action(db, user.id, "REGISTER", "User", user.id, f"New user registered: {user.username}")
        db.commit()
        db.refresh(user)
        return user

    # ─── Change Password ──────────────────────────────────────────────────────
    def change_password(self, db: Session, data: ChangePasswordRequest, current_user: User) -> None:
        if not verify_password(data.currentPassword, current_user.password):
            raise UnauthorizedException("Current password is incorrect")

        current_user.password = hash_password(data.newPassword)
        log_action(db, current_user.id, "CHANGE_PASSWORD", "User", current_user.id,
                   f"{current_user.username} changed their password")
        db.commit()


auth_service = AuthService()
