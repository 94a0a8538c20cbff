"""
validation.py — pydantic models per entity
One input model per entity, shared by create and partial-update paths
(`exclude_unset` tells an absent field from an explicit null). Each model
carries the client-facing message for every field it declares.

validate_input() is the request gate: it stops at the first broken field.
check_record() runs right before a write against the *Record model, which
adds the server-derived calories, and reports every broken field at once.
"""

import datetime as dt
import re
from typing import Annotated, ClassVar, Literal, Optional

from pydantic import (
    AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field,
    ValidationError as PydanticValidationError, ValidationInfo, ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError

from errors import ValidationError
from services.dates import to_day

# pydantic error types whose message is already client-facing
DESCRIBED_ERRORS = ("invalid_field", "password")


def password_errors(password: str) -> list[str]:
    errors = []
    if len(password) < 6:
        errors.append("Password must be at least 6 characters long")
    if len(password) > 100:
        errors.append("Password cannot exceed 100 characters")
    if not re.search(r"[a-zA-Z]", password):
        errors.append("Password must contain at least one letter")
    return errors


def _check_password(password: str) -> str:
    errors = password_errors(password)
    if errors:
        raise PydanticCustomError("password", ", ".join(errors))
    return password


def _as_day(value):
    if isinstance(value, (dt.date, str)):
        try:
            return to_day(value)
        except ValidationError:
            raise ValueError("invalid calendar day")
    return value


def _lowered(value):
    return value.strip().lower() if isinstance(value, str) else value


Day = Annotated[dt.date, BeforeValidator(_as_day)]
Email = Annotated[EmailStr, BeforeValidator(_lowered)]
Password = Annotated[str, AfterValidator(_check_password)]
Gender = Annotated[Literal["male", "female"], BeforeValidator(_lowered)]
WorkoutType = Annotated[Literal["cardio", "strength", "yoga", "sports", "other"], BeforeValidator(_lowered)]
Intensity = Annotated[Literal["low", "medium", "high"], BeforeValidator(_lowered)]

Name = Annotated[str, Field(min_length=2, max_length=100)]
Weight = Annotated[float, Field(ge=20, le=300)]
Height = Annotated[float, Field(ge=100, le=250)]
Age = Annotated[int, Field(ge=13, le=120)]


class FitModel(BaseModel):
    """Base for request models: unknown keys are dropped, strings trimmed,
    and any field failure is reported with the field's own message."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, populate_by_name=True)

    MESSAGES: ClassVar[dict[str, str]] = {}
    REQUIRED: ClassVar[tuple[str, ...]] = ()
    REQUIRED_MESSAGE: ClassVar[str] = ""

    @field_validator("*", mode="wrap")
    @classmethod
    def _describe(cls, value, handler: ValidatorFunctionWrapHandler, info: ValidationInfo):
        try:
            return handler(value)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            if first["type"] == "password":
                raise PydanticCustomError("password", first["msg"])
            raise PydanticCustomError("invalid_field", cls.MESSAGES.get(info.field_name, "Invalid value"))


PROFILE_MESSAGES = {
    "name": "Name must be at least 2 characters long",
    "weight": "Weight must be between 20 and 300 kg",
    "height": "Height must be between 100 and 250 cm",
    "age": "Age must be between 13 and 120 years",
    "gender": 'Gender must be either "male" or "female"',
}


class RegisterInput(FitModel):
    MESSAGES = {
        **PROFILE_MESSAGES,
        "email": "Please provide a valid email address",
        "password": "Password is required",
    }
    REQUIRED = ("name", "email", "password")
    REQUIRED_MESSAGE = "Name, email, and password are required"

    name: Name = None
    email: Email = None
    password: Password = None
    weight: Optional[Weight] = None
    height: Optional[Height] = None
    age: Optional[Age] = None
    gender: Optional[Gender] = None


class LoginInput(FitModel):
    MESSAGES = {
        "email": "Please provide a valid email address",
        "password": "Password is required",
    }
    REQUIRED = ("email", "password")
    REQUIRED_MESSAGE = "Email and password are required"

    email: Email = None
    password: str = None


class ProfileInput(FitModel):
    MESSAGES = PROFILE_MESSAGES

    name: Name = None
    weight: Optional[Weight] = None
    height: Optional[Height] = None
    age: Optional[Age] = None
    gender: Optional[Gender] = None


class GoalsInput(FitModel):
    MESSAGES = {
        "steps": "Daily steps goal must be between 1,000 and 50,000",
        "calories": "Daily calories goal must be between 100 and 2,000",
        "workouts": "Weekly workouts goal must be between 1 and 14",
    }
    REQUIRED = ("steps", "calories", "workouts")
    REQUIRED_MESSAGE = "Steps, calories, and workouts goals are required"

    steps: int = Field(None, ge=1000, le=50000)
    calories: int = Field(None, ge=100, le=2000)
    workouts: int = Field(None, ge=1, le=14)


class StepsInput(FitModel):
    MESSAGES = {
        "date": "Please provide a valid date (YYYY-MM-DD)",
        "steps": "Steps must be between 0 and 100,000",
        "duration": "Duration must be between 1 and 1440 minutes",
    }
    REQUIRED = ("date", "steps", "duration")
    REQUIRED_MESSAGE = "Date, steps, and duration are required"

    date: Day = None
    steps: int = Field(None, ge=0, le=100000)
    duration: int = Field(None, ge=1, le=1440)


class StepsRecord(StepsInput):
    MESSAGES = {**StepsInput.MESSAGES, "calories_burned": "Calories burned seems unrealistic (max 5000)"}

    calories_burned: int = Field(None, ge=0, le=5000, alias="caloriesBurned")


class WorkoutInput(FitModel):
    MESSAGES = {
        "date": "Please provide a valid date (YYYY-MM-DD)",
        "type": "Invalid workout type",
        "name": "Workout name must be between 1 and 100 characters",
        "duration": "Duration must be between 5 and 480 minutes",
        "intensity": "Invalid intensity level",
        "notes": "Notes cannot exceed 500 characters",
    }
    REQUIRED = ("date", "type", "name", "duration", "intensity")
    REQUIRED_MESSAGE = "Date, type, name, duration, and intensity are required"

    date: Day = None
    type: WorkoutType = None
    name: str = Field(None, min_length=1, max_length=100)
    duration: int = Field(None, ge=5, le=480)
    intensity: Intensity = None
    notes: Optional[str] = Field(None, max_length=500)


class WorkoutRecord(WorkoutInput):
    MESSAGES = {**WorkoutInput.MESSAGES, "calories_burned": "Calories burned seems unrealistic (max 2000 per workout)"}

    calories_burned: int = Field(None, ge=0, le=2000, alias="caloriesBurned")


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_input(model: type[FitModel], data: dict, partial: bool = False) -> dict:
    """Validate client input, raising on the first broken field.

    Returns the cleaned fields that were actually supplied: strings trimmed,
    emails and choices lowercased, dates normalized, unknown keys dropped.
    """
    if not partial and any(_is_missing(data.get(name)) for name in model.REQUIRED):
        raise ValidationError(model.REQUIRED_MESSAGE)
    try:
        parsed = model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(exc.errors()[0]["msg"])
    return parsed.model_dump(exclude_unset=True)


def check_record(model: type[FitModel], values: dict) -> None:
    """Final check on the values about to be stored; all failures joined by ', '."""
    try:
        model.model_validate(values)
    except PydanticValidationError as exc:
        raise ValidationError(", ".join(err["msg"] for err in exc.errors()))
