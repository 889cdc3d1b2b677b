"""User accounts, profiles and derived goals."""

import logging
import re
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Protocol
from uuid import UUID, uuid4

from diet_tracker.domain.recommendations import ConditionLabel, Recommendations
from diet_tracker.domain.users import (
    ActivityLevel,
    AuthResult,
    FitnessGoal,
    Gender,
    HealthCondition,
    Location,
    Measurement,
    User,
    UserPage,
    UserProfile,
)
from diet_tracker.errors import AuthenticationError, NotFoundError, ValidationError
from diet_tracker.services.body_metrics import (
    calculate_metrics,
    goal_inputs_changed,
    recompute_goals,
)
from diet_tracker.services.pagination import clamp_limit, clamp_page, page_count
from diet_tracker.services.recommendations import RecommendationEngine
from diet_tracker.services.security import PasswordHasher, TokenService

_logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[\w.+-]+@([\w-]+\.)+[A-Za-z]{2,}$")
MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 50
AGE_RANGE = (12, 120)
WEIGHT_RANGES: dict[str, tuple[float, float]] = {"kg": (20, 300), "lbs": (44, 660)}
HEIGHT_RANGES: dict[str, tuple[float, float]] = {"cm": (100, 250), "ft": (3.3, 8.2)}

PROFILE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "age",
        "gender",
        "weight",
        "height",
        "activity_level",
        "fitness_goal",
        "health_conditions",
        "location",
    }
)
CREDENTIAL_FIELDS: frozenset[str] = frozenset({"email", "password"})


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def find_by_id(self, user_id: UUID) -> User | None:
        """Return a user by id, if present."""

    def find_by_email(self, email: str) -> User | None:
        """Return a user by lower-cased email, if present."""

    def save(self, user: User) -> User:
        """Insert or replace the user and return the stored record."""

    def delete(self, user_id: UUID) -> None:
        """Delete the user."""

    def list_logged_in(
        self, search: str | None, offset: int, limit: int
    ) -> tuple[list[User], int]:
        """Return users with a last login, most recent first, and the total."""


@dataclass
class UserService:  # noqa: PLR0904
    """Application service for accounts and profiles."""

    repository: UserRepository
    hasher: PasswordHasher
    tokens: TokenService
    recommender: RecommendationEngine
    admin_email: str | None = None

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account and return it with a fresh token."""
        normalized = _normalize_email(email)
        _validate_name(name)
        _validate_password(password)
        if self.repository.find_by_email(normalized) is not None:
            raise ValidationError("User already exists", field="email")
        user = User(
            id=uuid4(),
            name=name.strip(),
            email=normalized,
            password_hash=self.hasher.hash(password),
            is_admin=self._is_admin_email(normalized),
            created_at=datetime.now(tz=UTC),
        )
        saved = self.repository.save(user)
        _logger.info("Registered user: user_id=%s", saved.id)
        return AuthResult(user=saved, token=self.tokens.issue(saved.id))

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials, stamp the login time and return a token."""
        user = self.repository.find_by_email(email.strip().lower())
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        saved = self.repository.save(replace(user, last_login=datetime.now(tz=UTC)))
        return AuthResult(user=saved, token=self.tokens.issue(saved.id))

    def authenticate(self, token: str) -> User:
        """Return the user a bearer token belongs to."""
        user_id = self.tokens.decode(token)
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise AuthenticationError("Not authorized, user not found")
        return user

    def refresh_token(self, user_id: UUID) -> str:
        return self.tokens.issue(self._require(user_id).id)

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the user with BMI, calories and macros."""
        return _profile(self._require(user_id))

    def update_profile(
        self,
        user_id: UUID,
        changes: dict[str, object],
        *,
        allow_credentials: bool = False,
    ) -> UserProfile:
        """Apply whitelisted changes and refresh goals when their inputs moved.

        Weight, height and location merge into the stored values; every other
        field is replaced.
        """
        allowed = PROFILE_FIELDS | (CREDENTIAL_FIELDS if allow_credentials else set())
        if not set(changes) <= allowed:
            raise ValidationError("Invalid updates!")

        user = self._require(user_id)
        updated = user
        for key, value in changes.items():
            updated = self._apply_change(updated, key, value)

        if goal_inputs_changed(set(changes)):
            updated = recompute_goals(updated)
        saved = self.repository.save(updated)
        return _profile(saved)

    def delete_account(self, user_id: UUID) -> None:
        self._require(user_id)
        self.repository.delete(user_id)
        _logger.info("Deleted user: user_id=%s", user_id)

    def list_users(
        self, search: str | None, page: int | None, limit: int | None
    ) -> UserPage:
        """Return a page of users who have logged in, with their metrics."""
        page_number = clamp_page(page)
        page_size = clamp_limit(limit, default=20)
        cleaned = search.strip() if search else None
        users, total = self.repository.list_logged_in(
            cleaned or None, (page_number - 1) * page_size, page_size
        )
        return UserPage(
            users=[_profile(user) for user in users],
            page=page_number,
            pages=page_count(total, page_size),
            total=total,
        )

    def recommendations(self, user_id: UUID) -> Recommendations:
        """Return advice for the user's BMI category, goal and conditions."""
        user = self._require(user_id)
        metrics = calculate_metrics(user)
        return self.recommender.recommend(
            metrics.bmi_category, user.fitness_goal, user.health_conditions
        )

    def health_conditions(self) -> list[ConditionLabel]:
        return self.recommender.condition_labels()

    def _require(self, user_id: UUID) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def _is_admin_email(self, email: str) -> bool:
        return bool(self.admin_email) and email == self.admin_email.strip().lower()

    def _apply_change(  # noqa: PLR0911
        self, user: User, key: str, value: object
    ) -> User:
        if key == "name":
            _validate_name(value)
            return replace(user, name=str(value).strip())
        if key == "email":
            email = _normalize_email(value)
            existing = self.repository.find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ValidationError("Email already in use", field="email")
            return replace(user, email=email)
        if key == "password":
            _validate_password(value)
            return replace(user, password_hash=self.hasher.hash(str(value)))
        if key == "age":
            return replace(user, age=_validate_age(value))
        if key == "gender":
            return replace(user, gender=_enum_value(Gender, value, key))
        if key == "activity_level":
            return replace(user, activity_level=_enum_value(ActivityLevel, value, key))
        if key == "fitness_goal":
            return replace(user, fitness_goal=_enum_value(FitnessGoal, value, key))
        if key == "health_conditions":
            return replace(user, health_conditions=_conditions(value))
        if key == "weight":
            merged = _merge_measurement(user.weight, value, "kg", WEIGHT_RANGES, key)
            return replace(user, weight=merged)
        if key == "height":
            merged = _merge_measurement(user.height, value, "cm", HEIGHT_RANGES, key)
            return replace(user, height=merged)
        return replace(user, location=_merge_location(user.location, value))


def _profile(user: User) -> UserProfile:
    return UserProfile(user=user, metrics=calculate_metrics(user))


def _normalize_email(value: object) -> str:
    email = str(value or "").strip().lower()
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("Please provide a valid email", field="email")
    return email


def _validate_name(value: object) -> None:
    name = str(value or "").strip()
    if not name:
        raise ValidationError("Please provide a name", field="name")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name cannot be more than {MAX_NAME_LENGTH} characters", field="name"
        )


def _validate_password(value: object) -> None:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            field="password",
        )


def _validate_age(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError("Age must be a number", field="age")
    low, high = AGE_RANGE
    if not low <= value <= high:
        raise ValidationError(f"Age must be between {low} and {high}", field="age")
    return int(value)


def _enum_value(enum: type[StrEnum], value: object, field_name: str) -> str | None:
    if value is None:
        return None
    try:
        return enum(str(value)).value
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field_name}: {value}", field=field_name
        ) from exc


def _conditions(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list | tuple):
        raise ValidationError(
            "Health conditions must be a list", field="health_conditions"
        )
    return tuple(
        _enum_value(HealthCondition, entry, "health_conditions") for entry in value
    )


def _merge_measurement(
    current: Measurement | None,
    change: object,
    default_unit: str,
    ranges: dict[str, tuple[float, float]],
    field_name: str,
) -> Measurement | None:
    if change is None:
        return None
    if not isinstance(change, dict):
        raise ValidationError(f"Invalid {field_name}", field=field_name)
    value = change.get("value", current.value if current else None)
    unit = change.get("unit") or (current.unit if current else default_unit)
    if unit not in ranges:
        raise ValidationError(f"Invalid {field_name} unit: {unit}", field=field_name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    low, high = ranges[unit]
    if not low <= value <= high:
        raise ValidationError(
            f"{field_name.capitalize()} must be between {low} and {high} {unit}",
            field=field_name,
        )
    return Measurement(value=float(value), unit=unit)


def _merge_location(current: Location | None, change: object) -> Location | None:
    if change is None:
        return None
    if not isinstance(change, dict):
        raise ValidationError("Invalid location", field="location")
    base = current or Location()
    merged = {
        key: change.get(key, getattr(base, key))
        for key in ("area", "landmark", "state", "district")
    }
    return Location(
        **{key: str(value).strip() if value else None for key, value in merged.items()}
    )
