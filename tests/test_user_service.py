"""Tests for accounts and profile handling."""

from datetime import UTC, datetime, timedelta

import pytest

from diet_tracker.domain.users import AuthResult
from diet_tracker.errors import AuthenticationError, NotFoundError, ValidationError
from diet_tracker.services.users import UserService
from tests.conftest import make_user


def _register(
    user_service: UserService, email: str = "Asha@Example.com"
) -> AuthResult:
    return user_service.register("Asha", email, "secret-pass")


def test_register_normalizes_email_and_hashes_password(user_service) -> None:
    result = _register(user_service)

    assert result.user.email == "asha@example.com"
    assert result.user.password_hash != "secret-pass"
    assert result.user.is_admin is False
    assert user_service.authenticate(result.token).id == result.user.id


def test_register_rejects_duplicate_email(user_service) -> None:
    _register(user_service)

    with pytest.raises(ValidationError, match="User already exists"):
        _register(user_service, "asha@example.com")


def test_register_validates_input(user_service) -> None:
    with pytest.raises(ValidationError):
        user_service.register("Asha", "not-an-email", "secret-pass")
    with pytest.raises(ValidationError):
        user_service.register("Asha", "asha@example.com", "short")
    with pytest.raises(ValidationError):
        user_service.register("x" * 51, "asha@example.com", "secret-pass")


def test_admin_email_grants_admin_flag(user_service) -> None:
    result = user_service.register("Root", "Admin@Example.com", "secret-pass")

    assert result.user.is_admin is True


def test_login_stamps_last_login(user_service, user_repository) -> None:
    created = _register(user_service)

    result = user_service.login(" ASHA@example.com ", "secret-pass")

    assert result.user.id == created.user.id
    assert user_repository.users[created.user.id].last_login is not None


def test_login_rejects_bad_credentials(user_service) -> None:
    _register(user_service)

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        user_service.login("asha@example.com", "wrong-pass")
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        user_service.login("nobody@example.com", "secret-pass")


def test_authenticate_rejects_token_of_deleted_user(user_service) -> None:
    result = _register(user_service)
    user_service.delete_account(result.user.id)

    with pytest.raises(AuthenticationError):
        user_service.authenticate(result.token)
    with pytest.raises(NotFoundError):
        user_service.get_profile(result.user.id)


def test_update_profile_recomputes_goals(user_service) -> None:
    user_id = _register(user_service).user.id

    profile = user_service.update_profile(
        user_id,
        {
            "age": 30,
            "gender": "male",
            "weight": {"value": 70, "unit": "kg"},
            "height": {"value": 175},
            "activity_level": "moderate",
            "fitness_goal": "maintenance",
        },
    )

    assert profile.user.height.unit == "cm"
    assert profile.user.daily_calorie_goal == 2556
    assert profile.user.daily_protein_goal == 112
    assert profile.metrics.bmi == 22.9
    assert profile.metrics.bmi_category == "Normal weight"


def test_update_profile_merges_partial_measurement(user_service) -> None:
    user_id = _register(user_service).user.id
    user_service.update_profile(user_id, {"weight": {"value": 150, "unit": "lbs"}})

    profile = user_service.update_profile(user_id, {"weight": {"value": 160}})

    assert profile.user.weight.value == 160
    assert profile.user.weight.unit == "lbs"


def test_update_profile_merges_location(user_service) -> None:
    user_id = _register(user_service).user.id
    user_service.update_profile(user_id, {"location": {"state": "Kerala"}})

    profile = user_service.update_profile(
        user_id, {"location": {"district": " Kochi "}}
    )

    assert profile.user.location.state == "Kerala"
    assert profile.user.location.district == "Kochi"


def test_name_change_keeps_goals(user_service) -> None:
    user_id = _register(user_service).user.id
    user_service.update_profile(
        user_id,
        {
            "age": 30,
            "gender": "female",
            "weight": {"value": 60, "unit": "kg"},
            "height": {"value": 165, "unit": "cm"},
            "activity_level": "light",
        },
    )

    before = user_service.get_profile(user_id).user.daily_calorie_goal
    after = user_service.update_profile(user_id, {"name": "Asha K"})

    assert after.user.name == "Asha K"
    assert after.user.daily_calorie_goal == before


def test_update_profile_rejects_unknown_and_credential_fields(user_service) -> None:
    user_id = _register(user_service).user.id

    with pytest.raises(ValidationError, match="Invalid updates!"):
        user_service.update_profile(user_id, {"is_admin": True})
    with pytest.raises(ValidationError, match="Invalid updates!"):
        user_service.update_profile(user_id, {"email": "new@example.com"})


def test_update_profile_validates_ranges(user_service) -> None:
    user_id = _register(user_service).user.id

    with pytest.raises(ValidationError):
        user_service.update_profile(user_id, {"age": 8})
    with pytest.raises(ValidationError):
        user_service.update_profile(user_id, {"weight": {"value": 500, "unit": "kg"}})
    with pytest.raises(ValidationError):
        user_service.update_profile(user_id, {"height": {"value": 175, "unit": "m"}})
    with pytest.raises(ValidationError):
        user_service.update_profile(user_id, {"gender": "robot"})
    with pytest.raises(ValidationError):
        user_service.update_profile(user_id, {"health_conditions": ["flu"]})


def test_credentials_change_when_allowed(user_service) -> None:
    user_id = _register(user_service).user.id

    user_service.update_profile(
        user_id,
        {"email": "NEW@example.com", "password": "another-pass"},
        allow_credentials=True,
    )

    assert user_service.login("new@example.com", "another-pass").user.id == user_id


def test_email_change_keeps_admin_flag(user_service, user_repository) -> None:
    user_id = _register(user_service).user.id
    admin_id = user_service.register("Root", "admin@example.com", "secret-pass").user.id

    user_service.update_profile(
        admin_id, {"email": "root@example.com"}, allow_credentials=True
    )
    user_service.update_profile(
        user_id, {"email": "admin@example.com"}, allow_credentials=True
    )

    assert user_repository.users[admin_id].is_admin is True
    assert user_repository.users[user_id].is_admin is False


def test_list_users_only_includes_logged_in(user_service, user_repository) -> None:
    now = datetime.now(tz=UTC)
    older = user_repository.save(
        make_user(name="Ravi", email="ravi@example.com", last_login=now - timedelta(1))
    )
    newer = user_repository.save(
        make_user(name="Meera", email="meera@example.com", last_login=now)
    )
    user_repository.save(make_user(name="Idle", email="idle@example.com"))

    page = user_service.list_users(None, 1, 20)

    assert [profile.user.id for profile in page.users] == [newer.id, older.id]
    assert page.total == 2
    assert page.pages == 1

    searched = user_service.list_users("rav", None, None)

    assert [profile.user.id for profile in searched.users] == [older.id]


def test_recommendations_use_profile(user_service) -> None:
    user_id = _register(user_service).user.id
    user_service.update_profile(
        user_id,
        {
            "weight": {"value": 95, "unit": "kg"},
            "height": {"value": 170, "unit": "cm"},
            "fitness_goal": "weight_loss",
            "health_conditions": ["high_blood_pressure"],
        },
    )

    result = user_service.recommendations(user_id)

    assert result.general == ["Focus on creating a sustainable calorie deficit"]
    assert "Reduce sodium intake (aim for <2300mg/day)" in result.dietary
    assert result.exercise[-1] == (
        "Regular aerobic exercise can help lower blood pressure"
    )


def test_health_conditions_are_listed(user_service) -> None:
    assert len(user_service.health_conditions()) == 13
