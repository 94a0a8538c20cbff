from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint
from database import Base


class StepsEntry(Base):
    __tablename__ = "steps_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    steps = Column(Integer, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    calories_burned = Column(Integer, nullable=False, default=0)  # derived, never client-supplied
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_steps_user_date"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "steps": self.steps,
            "duration": self.duration,
            "caloriesBurned": self.calories_burned,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
