from pydantic import BaseModel, field_validator
from typing import Optional

from fueltrack.models.user import RoleName
from fueltrack.schemas.auth import validate_password_strength, validate_username


class UserCreateRequest(BaseModel):
    username: str
    password: str
    role:     RoleName = RoleName.USER

    @field_validator("username")
    @classmethod
    def check_username(cls, v): return validate_username(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v): return validate_password_strength(v)


class UserUpdateRequest(BaseModel):
    username: Optional[str]      = None
    password: Optional[str]      = None
    role:     Optional[RoleName] = None
    isActive: Optional[bool]     = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        return validate_username(v) if v is not None else v

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return validate_password_strength(v) if v is not None else v
