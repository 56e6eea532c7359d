from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from fueltrack.database import Base
from fueltrack.utils.clock import utcnow


class Report(Base):
    """Free-text delivery/incident note attached to a trip."""
    __tablename__ = "reports"

    id          = Column(Integer, primary_key=True, index=True)
    tripId      = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    details     = Column(Text, nullable=False)
    createdById = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    createdAt   = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    trip       = relationship("Trip", back_populates="reports")
    created_by = relationship("User")

    def __repr__(self):
        return f"<Report id={self.id} tripId={self.tripId}>"
