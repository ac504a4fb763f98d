"""
Car operations: CRUD with cascading deletes, insurance validity checks
and history reconstruction.
"""

import logging
import re
from datetime import date, datetime
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from app.db.session import transaction
from app.models.car import Car
from app.models.owner import Owner
from app.repositories import cars as car_repository
from app.repositories import claims as claim_repository
from app.repositories import owners as owner_repository
from app.repositories import policies as policy_repository
from app.schemas.car import CarCreate, CarUpdate
from app.schemas.history import CarHistoryResponse
from app.services.history import build_history_events

logger = logging.getLogger(__name__)

MIN_VALIDITY_DATE = date(1900, 1, 1)
MAX_VALIDITY_DATE = date(2100, 12, 31)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def _get_car_or_raise(db: Session, car_id: int) -> Car:
    car = car_repository.get_by_id(db, car_id)
    if car is None:
        raise ResourceNotFoundError(f"Car not found with id: {car_id}")
    return car

def _get_owner_or_raise(db: Session, owner_id: int) -> Owner:
    owner = owner_repository.get_by_id(db, owner_id)
    if owner is None:
        raise ResourceNotFoundError(f"Owner not found with id: {owner_id}")
    return owner

def parse_validity_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string and check it lies within the supported range.
    Raises ValidationError otherwise.
    """
    try:
        if not _ISO_DATE.match(value or ""):
            raise ValueError(value)
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format. Expected format: YYYY-MM-DD") from None

    if parsed < MIN_VALIDITY_DATE or parsed > MAX_VALIDITY_DATE:
        raise ValidationError(
            f"Date must be between {MIN_VALIDITY_DATE.isoformat()} and {MAX_VALIDITY_DATE.isoformat()}"
        )
    return parsed

def list_cars(db: Session) -> List[Car]:
    logger.info("Fetching all cars")
    return car_repository.list_all(db)

def get_car(db: Session, car_id: int) -> Car:
    logger.info(f"Fetching car with id: {car_id}")
    return _get_car_or_raise(db, car_id)

def list_cars_by_owner(db: Session, owner_id: int) -> List[Car]:
    logger.info(f"Fetching cars for owner with id: {owner_id}")
    _get_owner_or_raise(db, owner_id)
    return car_repository.list_by_owner(db, owner_id)

def create_car(db: Session, car_in: CarCreate) -> Car:
    logger.info(f"Creating new car with VIN: {car_in.vin}")

    try:
        with transaction(db):
            if car_repository.get_by_vin(db, car_in.vin) is not None:
                raise ConflictError(f"Car with VIN {car_in.vin} already exists")
            owner = _get_owner_or_raise(db, car_in.owner_id)

            car = car_repository.save(db, Car(
                vin=car_in.vin,
                make=car_in.make,
                model=car_in.model,
                year_of_manufacture=car_in.year_of_manufacture,
                owner=owner,
            ))
    except IntegrityError:
        # Another request stored the same VIN after the lookup above
        logger.warning(f"Unique constraint violated creating car with VIN: {car_in.vin}")
        raise ConflictError(f"Car with VIN {car_in.vin} already exists") from None

    db.refresh(car)
    logger.info(f"Successfully created car with id: {car.id}")
    return car

def update_car(db: Session, car_id: int, car_in: CarUpdate) -> Car:
    """
    Apply a partial update. Fields left as None keep their stored value.

    Every successful update also deletes all insurance policies of the car.
    """
    logger.info(f"Updating car with id: {car_id}")

    try:
        with transaction(db):
            car = _get_car_or_raise(db, car_id)

            if car_in.vin is not None and car_in.vin != car.vin:
                existing = car_repository.get_by_vin(db, car_in.vin)
                if existing is not None and existing.id != car.id:
                    raise ConflictError(f"Car with VIN {car_in.vin} already exists")
                car.vin = car_in.vin

            if car_in.make is not None:
                car.make = car_in.make
            if car_in.model is not None:
                car.model = car_in.model
            if car_in.year_of_manufacture is not None:
                car.year_of_manufacture = car_in.year_of_manufacture
            if car_in.owner_id is not None:
                car.owner = _get_owner_or_raise(db, car_in.owner_id)

            policies = policy_repository.list_by_car(db, car_id)
            if policies:
                logger.info(f"Deleting {len(policies)} insurance policies for car id: {car_id}")
                policy_repository.delete_all(db, policies)

            car_repository.save(db, car)
    except IntegrityError:
        logger.warning(f"Unique constraint violated updating car with id: {car_id}")
        raise ConflictError(f"Car with VIN {car_in.vin} already exists") from None

    db.refresh(car)
    logger.info(f"Successfully updated car with id: {car.id}")
    return car

def delete_car(db: Session, car_id: int) -> None:
    """Delete a car after its policies and then its claims, in one transaction."""
    logger.info(f"Deleting car with id: {car_id}")

    with transaction(db):
        car = _get_car_or_raise(db, car_id)

        policies = policy_repository.list_by_car(db, car_id)
        if policies:
            logger.info(f"Deleting {len(policies)} insurance policies for car id: {car_id}")
            policy_repository.delete_all(db, policies)

        claims = claim_repository.list_by_car(db, car_id)
        if claims:
            logger.info(f"Deleting {len(claims)} claims for car id: {car_id}")
            claim_repository.delete_all(db, claims)

        car_repository.delete(db, car)

    logger.info(f"Successfully deleted car with id: {car_id}")

def is_insurance_valid(db: Session, car_id: int, date_str: str) -> bool:
    """
    Whether any policy of the car covers the given day, both ends inclusive.

    Raises ResourceNotFoundError for an unknown car, then ValidationError for
    a malformed date or one outside 1900-01-01..2100-12-31.
    """
    logger.info(f"Checking insurance validity for car: {car_id} on date: {date_str}")

    if not car_repository.exists_by_id(db, car_id):
        raise ResourceNotFoundError(f"Car not found with id: {car_id}")

    on_date = parse_validity_date(date_str)
    valid = policy_repository.exists_active_on_date(db, car_id, on_date)
    logger.info(f"Insurance validity for car {car_id} on date {on_date}: {valid}")
    return valid

def get_car_history(db: Session, car_id: int) -> CarHistoryResponse:
    logger.info(f"Fetching history for car: {car_id}")

    car = _get_car_or_raise(db, car_id)
    events = build_history_events(
        policy_repository.list_by_car(db, car_id),
        claim_repository.list_by_car(db, car_id),
    )

    return CarHistoryResponse(
        car_id=car.id,
        vin=car.vin,
        make=car.make,
        model=car.model,
        year_of_manufacture=car.year_of_manufacture,
        events=events,
    )
