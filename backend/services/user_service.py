"""
user_service.py — Accounts, profile and goals
Registration with default goals, credential checks, and partial updates
where an absent field is left alone and an explicit None clears it.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth import hash_password, verify_password
from config import DEFAULT_WEIGHT_KG
from errors import ConflictError, NotFoundError, ValidationError
from models.user import User
from services.validation import (
    GoalsInput, LoginInput, ProfileInput, RegisterInput, validate_input,
)

logger = logging.getLogger(__name__)

DEFAULT_GOALS = {"steps": 10000, "calories": 500, "workouts": 3}
INVALID_CREDENTIALS = "Invalid email or password"

# request field → model column
PROFILE_COLUMNS = {"name": "name", "weight": "weight", "height": "height", "age": "age", "gender": "gender"}
GOAL_COLUMNS = {"steps": "daily_steps", "calories": "daily_calories", "workouts": "weekly_workouts"}


class UserService:
    @staticmethod
    def get_by_id(db: Session, user_id: int) -> User | None:
        return db.query(User).filter_by(id=user_id).first()

    @staticmethod
    def get_or_404(db: Session, user_id: int) -> User:
        user = UserService.get_by_id(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter_by(email=email.strip().lower()).first()

    @staticmethod
    def weight_for(user: User | None) -> float:
        if user is not None and user.weight:
            return user.weight
        return DEFAULT_WEIGHT_KG

    @staticmethod
    def register(db: Session, data: dict) -> User:
        clean = validate_input(RegisterInput, data)

        if UserService.get_by_email(db, clean["email"]):
            raise ConflictError("A user with this email already exists")

        user = User(
            name=clean["name"],
            email=clean["email"],
            hashed_password=hash_password(clean["password"]),
            weight=clean.get("weight"),
            height=clean.get("height"),
            age=clean.get("age"),
            gender=clean.get("gender"),
            daily_steps=DEFAULT_GOALS["steps"],
            daily_calories=DEFAULT_GOALS["calories"],
            weekly_workouts=DEFAULT_GOALS["workouts"],
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            db.rollback()
            raise ConflictError("A user with this email already exists")
        db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    @staticmethod
    def authenticate(db: Session, data: dict) -> User:
        clean = validate_input(LoginInput, data)
        user = UserService.get_by_email(db, clean["email"])
        # Same message whether the email is unknown or the password is wrong
        if not user or not verify_password(data["password"], user.hashed_password):
            logger.warning("Failed login attempt")
            raise ValidationError(INVALID_CREDENTIALS)
        return user

    @staticmethod
    def get_profile(db: Session, user_id: int) -> dict:
        return UserService.get_or_404(db, user_id).to_dict()

    @staticmethod
    def update_profile(db: Session, user_id: int, data: dict) -> User:
        user = UserService.get_or_404(db, user_id)
        clean = validate_input(ProfileInput, data, partial=True)
        for field, column in PROFILE_COLUMNS.items():
            if field in clean:
                setattr(user, column, clean[field])
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_goals(db: Session, user_id: int) -> dict | None:
        user = UserService.get_or_404(db, user_id)
        if not user.has_goals:
            return None
        return UserService.goals_payload(user)

    @staticmethod
    def set_goals(db: Session, user_id: int, data: dict) -> dict:
        clean = validate_input(GoalsInput, data)
        user = UserService.get_or_404(db, user_id)
        for field, column in GOAL_COLUMNS.items():
            setattr(user, column, clean[field])
        db.commit()
        db.refresh(user)
        return UserService.goals_payload(user)

    @staticmethod
    def update_goals(db: Session, user_id: int, data: dict) -> dict:
        clean = validate_input(GoalsInput, data, partial=True)
        user = UserService.get_or_404(db, user_id)
        for field, column in GOAL_COLUMNS.items():
            if field in clean:
                setattr(user, column, clean[field])
        # A partial update on a user without goals fills the gaps with defaults
        for field, column in GOAL_COLUMNS.items():
            if getattr(user, column) is None:
                setattr(user, column, DEFAULT_GOALS[field])
        db.commit()
        db.refresh(user)
        return UserService.goals_payload(user)

    @staticmethod
    def goals_payload(user: User) -> dict:
        return {
            "steps": user.daily_steps,
            "calories": user.daily_calories,
            "workouts": user.weekly_workouts,
        }
