"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.supabase_rows import parse_datetime, response_total, to_iso
from diet_tracker.domain.users import Location, Measurement, User
from diet_tracker.services.users import UserRepository

_TABLE = "users"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def find_by_id(self, user_id: UUID) -> User | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return user_from_row(response.data[0])
        return None

    def find_by_email(self, email: str) -> User | None:
        """Return the user for a lower-cased email, if present."""
        response = (
            self.client.table(_TABLE).select("*").eq("email", email).limit(1).execute()
        )
        if response.data:
            return user_from_row(response.data[0])
        return None

    def save(self, user: User) -> User:
        """Upsert the user row and return it."""
        response = self.client.table(_TABLE).upsert(user_to_row(user)).execute()
        if not response.data:
            raise RuntimeError("Failed to save user in Supabase")
        return user_from_row(response.data[0])

    def delete(self, user_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq("id", str(user_id)).execute()

    def list_logged_in(
        self, search: str | None, offset: int, limit: int
    ) -> tuple[list[User], int]:
        """Return users who have logged in, most recent login first."""
        request = (
            self.client.table(_TABLE)
            .select("*", count="exact")
            .not_.is_("last_login", "null")
        )
        if search:
            pattern = search.replace(",", " ")
            request = request.or_(f"name.ilike.%{pattern}%,email.ilike.%{pattern}%")
        response = (
            request.order("last_login", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return [user_from_row(row) for row in rows], response_total(response, rows)


def user_to_row(user: User) -> dict[str, object]:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "password_hash": user.password_hash,
        "age": user.age,
        "gender": user.gender,
        "weight": _measurement_row(user.weight),
        "height": _measurement_row(user.height),
        "activity_level": user.activity_level,
        "fitness_goal": user.fitness_goal,
        "health_conditions": list(user.health_conditions),
        "location": (
            {
                "area": user.location.area,
                "landmark": user.location.landmark,
                "state": user.location.state,
                "district": user.location.district,
            }
            if user.location
            else None
        ),
        "daily_calorie_goal": user.daily_calorie_goal,
        "daily_protein_goal": user.daily_protein_goal,
        "daily_carbs_goal": user.daily_carbs_goal,
        "daily_fat_goal": user.daily_fat_goal,
        "is_admin": user.is_admin,
        "last_login": to_iso(user.last_login),
        "created_at": to_iso(user.created_at),
    }


def user_from_row(row: dict[str, object]) -> User:
    return User(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash") or ""),
        age=row.get("age"),
        gender=row.get("gender"),
        weight=_parse_measurement(row.get("weight")),
        height=_parse_measurement(row.get("height")),
        activity_level=row.get("activity_level"),
        fitness_goal=row.get("fitness_goal"),
        health_conditions=tuple(row.get("health_conditions") or ()),
        location=_parse_location(row.get("location")),
        daily_calorie_goal=row.get("daily_calorie_goal"),
        daily_protein_goal=row.get("daily_protein_goal"),
        daily_carbs_goal=row.get("daily_carbs_goal"),
        daily_fat_goal=row.get("daily_fat_goal"),
        is_admin=bool(row.get("is_admin", False)),
        last_login=parse_datetime(row.get("last_login")),
        created_at=parse_datetime(row.get("created_at")),
    )


def _measurement_row(value: Measurement | None) -> dict[str, object] | None:
    if value is None:
        return None
    return {"value": value.value, "unit": value.unit}


def _parse_measurement(value: object) -> Measurement | None:
    if not isinstance(value, dict) or value.get("value") is None:
        return None
    return Measurement(value=float(value["value"]), unit=str(value.get("unit") or ""))


def _parse_location(value: object) -> Location | None:
    if not isinstance(value, dict):
        return None
    return Location(
        area=value.get("area"),
        landmark=value.get("landmark"),
        state=value.get("state"),
        district=value.get("district"),
    )
