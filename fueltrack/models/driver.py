import enum
from sqlalchemy import Column, Integer, String, Date, TIMESTAMP, Enum
from fueltrack.database import Base
from fueltrack.utils.clock import utcnow


class DriverStatus(str, enum.Enum):
    ACTIVE    = "active"
    INACTIVE  = "inactive"
    SUSPENDED = "suspended"


class Driver(Base):
    __tablename__ = "drivers"

    id              = Column(Integer, primary_key=True, index=True)
    name            = Column(String(150), nullable=False, index=True)
    nationalId      = Column(String(50), nullable=False)
    phone           = Column(String(30), nullable=False)
    email           = Column(String(255), nullable=True)
    licenseNumber   = Column(String(100), unique=True, nullable=False)
    licenseExpiry   = Column(Date, nullable=True)
    status          = Column(Enum(DriverStatus), default=DriverStatus.ACTIVE, nullable=False)
    yearsExperience = Column(Integer, default=0, nullable=False)
    createdAt       = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updatedAt       = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Driver id={self.id} name={self.name} status={self.status}>"
