import enum
import uuid
from sqlalchemy import Column, Integer, String, TIMESTAMP, Enum
from sqlalchemy.orm import relationship
from fueltrack.database import Base
from fueltrack.utils.clock import utcnow


class TripStatus(str, enum.Enum):
    IN_TRANSIT = "in_transit"
    COMPLETED  = "completed"
    CANCELLED  = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not TripStatus.IN_TRANSIT


class FuelType(str, enum.Enum):
    DIESEL      = "diesel"
    GASOLINE    = "gasoline"
    NATURAL_GAS = "natural_gas"


MIN_QUANTITY_LITERS = 1
MAX_QUANTITY_LITERS = 30000


def _new_trip_id() -> str:
    return uuid.uuid4().hex


class Trip(Base):
    __tablename__ = "trips"

    id             = Column(String(32), primary_key=True, default=_new_trip_id)
    # Driver is stored by name, not by FK: renaming a driver leaves old trips untouched
    driverName     = Column(String(150), nullable=False, index=True)
    truckPlate     = Column(String(50), nullable=False, index=True)
    origin         = Column(String(255), nullable=False)
    destination    = Column(String(255), nullable=False)
    fuelType       = Column(Enum(FuelType), nullable=False)
    quantityLiters = Column(Integer, nullable=False)
    departureAt    = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    status         = Column(Enum(TripStatus), nullable=False, default=TripStatus.IN_TRANSIT, index=True)
    createdAt      = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updatedAt      = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    reports = relationship("Report", back_populates="trip", order_by="Report.createdAt")

    def __repr__(self):
        return f"<Trip id={self.id} truck={self.truckPlate} status={self.status}>"
