from sqlalchemy import Column, Integer, String, TIMESTAMP
from fueltrack.database import Base
from fueltrack.utils.clock import utcnow


class Truck(Base):
    __tablename__ = "trucks"

    id             = Column(Integer, primary_key=True, index=True)
    plate          = Column(String(50), unique=True, nullable=False, index=True)
    truckModel     = Column(String(150), nullable=False)
    capacityLiters = Column(Integer, nullable=False)
    createdAt      = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Truck id={self.id} plate={self.plate}>"
