from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func
from journey.core.database import Base
from sqlalchemy.orm import relationship
import uuid


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String, nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)

    owner_name = Column(String, nullable=False)
    owner_email = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    participants = relationship("Participant", back_populates="trip", cascade="all, delete")
    activities = relationship("Activity", back_populates="trip", cascade="all, delete")

    def to_dict(self):
        """Convert Trip instance to dictionary for caching"""
        return {
            "id": str(self.id),
            "destination": self.destination,
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
            "is_confirmed": self.is_confirmed,
            "owner_name": self.owner_name,
            "owner_email": self.owner_email,
        }
