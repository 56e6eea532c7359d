from pydantic import BaseModel, Field, field_validator
from typing import Optional


class TruckCreateRequest(BaseModel):
    plate:          str
    truckModel:     str
    capacityLiters: int = Field(gt=0)

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, v):
        if not v.strip(): raise ValueError("Plate cannot be empty")
        return v.strip().upper()

    @field_validator("truckModel")
    @classmethod
    def not_empty(cls, v):
        if not v.strip(): raise ValueError("Field cannot be empty")
        return v.strip()


class TruckUpdateRequest(BaseModel):
    plate:          Optional[str] = None
    truckModel:     Optional[str] = None
    capacityLiters: Optional[int] = Field(None, gt=0)

    @field_validator("plate")
    @classmethod
    def normalize_plate(cls, v):
        if v is None: return v
        if not v.strip(): raise ValueError("Plate cannot be empty")
        return v.strip().upper()
