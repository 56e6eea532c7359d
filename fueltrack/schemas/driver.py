from datetime import date
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from fueltrack.models.driver import DriverStatus


def _min_length(v: str, n: int, label: str) -> str:
    v = v.strip()
    if len(v) < n:
        raise ValueError(f"{label} must be at least {n} characters")
    return v


class DriverCreateRequest(BaseModel):
    name:            str
    nationalId:      str
    phone:           str
    email:           Optional[EmailStr] = None
    licenseNumber:   str
    licenseExpiry:   Optional[date]     = None
    status:          DriverStatus       = DriverStatus.ACTIVE
    yearsExperience: int                = Field(0, ge=0, le=50)

    @field_validator("name")
    @classmethod
    def check_name(cls, v): return _min_length(v, 2, "Name")

    @field_validator("nationalId")
    @classmethod
    def check_national_id(cls, v): return _min_length(v, 7, "National ID")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v): return _min_length(v, 10, "Phone")

    @field_validator("licenseNumber")
    @classmethod
    def check_license(cls, v): return _min_length(v, 5, "License number")

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return None if isinstance(v, str) and not v.strip() else v


class DriverUpdateRequest(BaseModel):
    name:            Optional[str]          = None
    nationalId:      Optional[str]          = None
    phone:           Optional[str]          = None
    email:           Optional[EmailStr]     = None
    licenseNumber:   Optional[str]          = None
    licenseExpiry:   Optional[date]         = None
    status:          Optional[DriverStatus] = None
    yearsExperience: Optional[int]          = Field(None, ge=0, le=50)

    @field_validator("name")
    @classmethod
    def check_name(cls, v): return _min_length(v, 2, "Name") if v is not None else v

    @field_validator("nationalId")
    @classmethod
    def check_national_id(cls, v): return _min_length(v, 7, "National ID") if v is not None else v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v): return _min_length(v, 10, "Phone") if v is not None else v

    @field_validator("licenseNumber")
    @classmethod
    def check_license(cls, v): return _min_length(v, 5, "License number") if v is not None else v
