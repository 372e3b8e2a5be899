from sqlalchemy import Column, ForeignKey, DateTime, String, Boolean, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from journey.core.database import Base
from datetime import datetime, timezone
import uuid


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, nullable=False)
    name = Column(String, nullable=True)
    is_confirmed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # To ensure no duplicate participants in a trip
    __table_args__ = (
        UniqueConstraint('trip_id', 'email', name='uq_trip_participant_email'),
    )

    trip = relationship("Trip", back_populates="participants")
