import enum
from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP, Enum
from sqlalchemy.orm import relationship
from fueltrack.database import Base
from fueltrack.utils.clock import utcnow


class RoleName(str, enum.Enum):
    ADMIN = "admin"
    USER  = "user"


class User(Base):
    __tablename__ = "users"

    id        = Column(Integer, primary_key=True, index=True)
    username  = Column(String(150), unique=True, nullable=False, index=True)
    password  = Column(String(255), nullable=False)
    role      = Column(Enum(RoleName), default=RoleName.USER, nullable=False)
    isActive  = Column(Boolean, default=True, nullable=False)
    createdAt = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updatedAt = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")
    audit_logs     = relationship("AuditLog", back_populates="user")

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role}>"
