import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.user import utcnow

DEFAULT_TRIP_IMAGE = "/public/assets/mountains.jpg"


def new_trip_id() -> str:
    return str(uuid.uuid4())


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(36), primary_key=True, default=new_trip_id)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    country = Column(String(100), nullable=False)
    date_from = Column(Date, nullable=False)
    date_to = Column(Date, nullable=False)
    trip_type = Column(JSON, nullable=True)  # Array of strings
    tags = Column(JSON, nullable=True)  # Array of strings
    budget = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=False, default=DEFAULT_TRIP_IMAGE)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    owner = relationship("User", back_populates="trips")
