import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fueltrack.models.trip import (
    TripStatus, FuelType, MIN_QUANTITY_LITERS, MAX_QUANTITY_LITERS,
)
from fueltrack.utils.clock import as_utc, utcnow


TEXT_FIELDS = ("driverName", "truckPlate", "origin", "destination")


def _strip_not_empty(v: str) -> str:
    if not v.strip():
        raise ValueError("Field cannot be empty")
    return v.strip()


# ─── Request Schemas ──────────────────────────────────────────────────────────
class TripCreateRequest(BaseModel):
    driverName:     str
    truckPlate:     str
    origin:         str
    destination:    str
    fuelType:       FuelType
    quantityLiters: int = Field(ge=MIN_QUANTITY_LITERS, le=MAX_QUANTITY_LITERS)
    departureAt:    datetime
    status:         TripStatus = TripStatus.IN_TRANSIT

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _strip_not_empty(v)

    @field_validator("departureAt")
    @classmethod
    def departure_in_future(cls, v: datetime) -> datetime:
        # Naive timestamps are taken as UTC
        if as_utc(v) <= utcnow():
            raise ValueError("departureAt must be in the future")
        return as_utc(v)

    @field_validator("status")
    @classmethod
    def starts_in_transit(cls, v: TripStatus) -> TripStatus:
        if v != TripStatus.IN_TRANSIT:
            raise ValueError("New trips start in_transit")
        return v


class TripUpdateRequest(BaseModel):
    """Partial update. Departure is not re-checked against the clock here."""
    driverName:     Optional[str]        = None
    truckPlate:     Optional[str]        = None
    origin:         Optional[str]        = None
    destination:    Optional[str]        = None
    fuelType:       Optional[FuelType]   = None
    quantityLiters: Optional[int]        = Field(None, ge=MIN_QUANTITY_LITERS, le=MAX_QUANTITY_LITERS)
    departureAt:    Optional[datetime]   = None
    status:         Optional[TripStatus] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _strip_not_empty(v)

    @field_validator("departureAt")
    @classmethod
    def normalize_departure(cls, v: datetime) -> datetime:
        return as_utc(v)


# ─── Query Schemas ────────────────────────────────────────────────────────────
class TripSortField(str, enum.Enum):
    """Columns a client may sort by. Anything else is rejected."""
    DRIVER_NAME     = "driverName"
    TRUCK_PLATE     = "truckPlate"
    ORIGIN          = "origin"
    DESTINATION     = "destination"
    FUEL_TYPE       = "fuelType"
    QUANTITY_LITERS = "quantityLiters"
    DEPARTURE_AT    = "departureAt"
    STATUS          = "status"
    CREATED_AT      = "createdAt"
    UPDATED_AT      = "updatedAt"


class SortOrder(str, enum.Enum):
    ASC  = "asc"
    DESC = "desc"


class TripFilter(BaseModel):
    search:    Optional[str]        = None
    status:    Optional[TripStatus] = None
    fuelType:  Optional[FuelType]   = None
    sortBy:    TripSortField        = TripSortField.DEPARTURE_AT
    sortOrder: SortOrder            = SortOrder.DESC

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_unset(cls, v, info):
        # Dashboard filter bars send "search=&status=" when a filter is cleared
        if isinstance(v, str) and not v.strip():
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("search")
    @classmethod
    def strip_search(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v


# ─── Response Schemas ─────────────────────────────────────────────────────────
class TripStats(BaseModel):
    activeTrips:       int = 0
    completedToday:    int = 0
    litersTransported: int = 0
    trucksInRoute:     int = 0
