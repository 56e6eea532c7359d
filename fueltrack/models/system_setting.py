from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from fueltrack.database import Base
from fueltrack.utils.clock import utcnow


class SystemSetting(Base):
    """Stores admin-managed operational settings (refresh interval, default fuel, ...)."""
    __tablename__ = "system_settings"

    id          = Column(Integer, primary_key=True, index=True)
    key         = Column(String(100), unique=True, nullable=False, index=True)
    value       = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    updatedAt   = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<SystemSetting key={self.key} value={self.value}>"
