"""
Insurance policy operations, including the repair of policies stored
without an end date.
"""

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError
from app.db.session import transaction
from app.models.insurance_policy import InsurancePolicy
from app.repositories import cars as car_repository
from app.repositories import policies as policy_repository
from app.schemas.policy import InsurancePolicyCreate, InsurancePolicyUpdate

logger = logging.getLogger(__name__)

def _one_year_after(start: date) -> date:
    try:
        return start.replace(year=start.year + 1)
    except ValueError:
        # 29 February rolls back to the 28th
        return start.replace(year=start.year + 1, day=28)

def _get_policy_or_raise(db: Session, policy_id: int) -> InsurancePolicy:
    policy = policy_repository.get_by_id(db, policy_id)
    if policy is None:
        raise ResourceNotFoundError(f"Insurance policy not found with id: {policy_id}")
    return policy

def _require_car(db: Session, car_id: int) -> None:
    if not car_repository.exists_by_id(db, car_id):
        raise ResourceNotFoundError(f"Car not found with id: {car_id}")

def create_policy(db: Session, policy_in: InsurancePolicyCreate) -> InsurancePolicy:
    logger.info(f"Creating insurance policy for car: {policy_in.car_id}")

    with transaction(db):
        _require_car(db, policy_in.car_id)
        policy = policy_repository.save(db, InsurancePolicy(
            car_id=policy_in.car_id,
            provider=policy_in.provider,
            start_date=policy_in.start_date,
            end_date=policy_in.end_date,
        ))

    db.refresh(policy)
    logger.info(f"Successfully created insurance policy with id: {policy.id} for car: {policy.car_id}")
    return policy

def get_policy(db: Session, policy_id: int) -> InsurancePolicy:
    logger.info(f"Retrieving insurance policy with id: {policy_id}")
    return _get_policy_or_raise(db, policy_id)

def list_policies(db: Session) -> List[InsurancePolicy]:
    logger.info("Retrieving all insurance policies")
    return policy_repository.list_all(db)

def list_policies_by_car(db: Session, car_id: int) -> List[InsurancePolicy]:
    logger.info(f"Retrieving insurance policies for car: {car_id}")
    return policy_repository.list_by_car(db, car_id)

def update_policy(db: Session, policy_id: int, policy_in: InsurancePolicyUpdate) -> InsurancePolicy:
    """car_id and provider are replaced only when given; both dates always are."""
    logger.info(f"Updating insurance policy with id: {policy_id}")

    with transaction(db):
        policy = _get_policy_or_raise(db, policy_id)

        if policy_in.car_id is not None:
            _require_car(db, policy_in.car_id)
            policy.car_id = policy_in.car_id
        if policy_in.provider is not None:
            policy.provider = policy_in.provider
        policy.start_date = policy_in.start_date
        policy.end_date = policy_in.end_date

        policy_repository.save(db, policy)

    db.refresh(policy)
    logger.info(f"Successfully updated insurance policy with id: {policy_id}")
    return policy

def delete_policy(db: Session, policy_id: int) -> None:
    logger.info(f"Deleting insurance policy with id: {policy_id}")

    with transaction(db):
        policy = _get_policy_or_raise(db, policy_id)
        policy_repository.delete(db, policy)

    logger.info(f"Successfully deleted insurance policy with id: {policy_id}")

def fix_open_ended_policies(db: Session) -> int:
    """Give every policy without an end date one year of coverage from its start. Returns the count."""
    logger.info("Fixing open-ended policies by setting default end dates")

    with transaction(db):
        open_ended = policy_repository.list_open_ended(db)
        for policy in open_ended:
            policy.end_date = _one_year_after(policy.start_date)
            policy_repository.save(db, policy)
            logger.info(f"Fixed open-ended policy {policy.id} by setting end date to {policy.end_date}")

    logger.info(f"Fixed {len(open_ended)} open-ended policies")
    return len(open_ended)
