from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, DateTime
from database import Base


def _iso(value):
    return value.isoformat() if value else None


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lowercased
    hashed_password = Column(String(255), nullable=False)

    # Profile (all optional)
    weight = Column(Float, nullable=True)  # kg
    height = Column(Float, nullable=True)  # cm
    age = Column(Integer, nullable=True)
    gender = Column(String(10), nullable=True)  # male/female

    # Goals; NULL daily_steps means the user never set goals
    daily_steps = Column(Integer, nullable=True)
    daily_calories = Column(Integer, nullable=True)
    weekly_workouts = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def has_goals(self) -> bool:
        return self.daily_steps is not None

    def goals_dict(self) -> dict:
        return {
            "dailySteps": self.daily_steps,
            "dailyCalories": self.daily_calories,
            "weeklyWorkouts": self.weekly_workouts,
        }

    def to_dict(self) -> dict:
        """Client-facing representation. Never includes the password hash."""
        profile = {
            "weight": self.weight,
            "height": self.height,
            "age": self.age,
            "gender": self.gender,
        }
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "profile": {k: v for k, v in profile.items() if v is not None},
            "goals": self.goals_dict() if self.has_goals else None,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
