"""Tests for policy CRUD and the open-ended repair."""

from datetime import date

import pytest

from app.core.exceptions import ResourceNotFoundError
from app.schemas.policy import InsurancePolicyCreate, InsurancePolicyUpdate
from app.services import car_service, policy_service
from tests.conftest import add_policy


def test_create_policy_for_unknown_car(db) -> None:
    with pytest.raises(ResourceNotFoundError):
        policy_service.create_policy(db, InsurancePolicyCreate(
            car_id=77, provider="GEICO", start_date=date(2024, 1, 1), end_date=date(2024, 12, 31),
        ))


def test_update_policy_keeps_provider_when_null(db, car) -> None:
    policy = add_policy(db, car, date(2024, 1, 1), date(2024, 12, 31))

    updated = policy_service.update_policy(db, policy.id, InsurancePolicyUpdate(
        start_date=date(2024, 2, 1), end_date=date(2025, 1, 31),
    ))

    assert updated.provider == "GEICO"
    assert updated.start_date == date(2024, 2, 1)
    assert updated.end_date == date(2025, 1, 31)


def test_delete_unknown_policy(db) -> None:
    with pytest.raises(ResourceNotFoundError):
        policy_service.delete_policy(db, 5)


def test_fix_open_ended_policies(db, car) -> None:
    open_ended = add_policy(db, car, date(2024, 3, 1), None)
    leap_day = add_policy(db, car, date(2024, 2, 29), None)
    closed = add_policy(db, car, date(2020, 1, 1), date(2020, 6, 30))

    assert policy_service.fix_open_ended_policies(db) == 2

    db.expire_all()
    assert policy_service.get_policy(db, open_ended.id).end_date == date(2025, 3, 1)
    assert policy_service.get_policy(db, leap_day.id).end_date == date(2025, 2, 28)
    assert policy_service.get_policy(db, closed.id).end_date == date(2020, 6, 30)
    assert car_service.is_insurance_valid(db, car.id, "2024-12-01") is True
