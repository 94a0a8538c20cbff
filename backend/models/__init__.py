# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.steps_entry import StepsEntry
from models.workout import Workout

__all__ = [
    "User",
    "StepsEntry",
    "Workout",
]
