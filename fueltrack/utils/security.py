import secrets
from datetime import datetime, timedelta

from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext

from fueltrack.config import settings
from fueltrack.utils.clock import utcnow
from fueltrack.utils.exceptions import TokenExpiredException, UnauthorizedException

# ─── Passwords ────────────────────────────────────────────────────────────────
# The bcrypt hash carries its salt; User.password stores it as-is
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ─── Tokens ───────────────────────────────────────────────────────────────────
def _encode(claims: dict, expire: datetime) -> str:
    return jwt.encode({**claims, "exp": expire}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _decode(token: str, expected_type: str, expired_exc: Exception, invalid_msg: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise expired_exc
    except JWTError:
        raise UnauthorizedException(invalid_msg)
    if payload.get("type") != expected_type:
        raise UnauthorizedException("Invalid token type")
    return payload


def create_access_token(user_id: int, role: str) -> str:
    """Bearer token for REST calls and the `/ws?token=` handshake."""
    expire = utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({"sub": str(user_id), "role": role, "type": "access"}, expire)


def create_refresh_token(user_id: int) -> tuple[str, datetime]:
    """Returns (token, expiry). The caller persists it so logout can revoke it."""
    expire = utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    token = _encode({"sub": str(user_id), "type": "refresh", "jti": secrets.token_hex(8)}, expire)
    return token, expire


def verify_access_token(token: str) -> dict:
    return _decode(token, "access", TokenExpiredException(), "Invalid or malformed token")


def verify_refresh_token(token: str) -> dict:
    return _decode(
        token, "refresh",
        UnauthorizedException("Refresh token has expired, please login again"),
        "Invalid refresh token",
    )
