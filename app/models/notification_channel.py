from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from ..database import Base

class NotificationChannel(Base):
    __tablename__ = "notification_channels"

    id = Column(Integer, primary_key=True)
    channel_id = Column(String, unique=True, index=True, nullable=False)  # stable, never regenerated
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    importance = Column(Integer, nullable=False)
    vibration_pattern = Column(JSON, nullable=False)  # ms durations: delay, buzz, pause, buzz
    lights_enabled = Column(Boolean, default=True)
    vibration_enabled = Column(Boolean, default=True)
    sound_uri = Column(String, nullable=False)
    audio_usage = Column(Integer, nullable=False)
    audio_content_type = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
