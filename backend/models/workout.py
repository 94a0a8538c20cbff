from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index
from database import Base


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    type = Column(String(20), nullable=False)  # cardio/strength/yoga/sports/other
    name = Column(String(100), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    intensity = Column(String(10), nullable=False)  # low/medium/high
    calories_burned = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_workouts_user_date", "user_id", "date"),
    )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "type": self.type,
            "name": self.name,
            "duration": self.duration,
            "intensity": self.intensity,
            "caloriesBurned": self.calories_burned,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if self.notes:
            data["notes"] = self.notes
        return data
