"""Data access for the insurancepolicy table."""

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.insurance_policy import InsurancePolicy


def get_by_id(db: Session, policy_id: int) -> Optional[InsurancePolicy]:
    return db.get(InsurancePolicy, policy_id)


def list_all(db: Session) -> List[InsurancePolicy]:
    return db.query(InsurancePolicy).order_by(InsurancePolicy.id).all()


def list_by_car(db: Session, car_id: int) -> List[InsurancePolicy]:
    return (
        db.query(InsurancePolicy)
        .filter(InsurancePolicy.car_id == car_id)
        .order_by(InsurancePolicy.id)
        .all()
    )


def exists_active_on_date(db: Session, car_id: int, on_date: date) -> bool:
    """True if any policy of the car covers on_date, both interval ends inclusive."""
    # NULL end dates never satisfy end_date >= on_date
    return (
        db.query(InsurancePolicy.id)
        .filter(
            InsurancePolicy.car_id == car_id,
            InsurancePolicy.start_date <= on_date,
            InsurancePolicy.end_date >= on_date,
        )
        .first()
        is not None
    )


def list_expiring_on(db: Session, on_date: date) -> List[InsurancePolicy]:
    return (
        db.query(InsurancePolicy)
        .filter(InsurancePolicy.end_date == on_date)
        .order_by(InsurancePolicy.id)
        .all()
    )


def list_open_ended(db: Session) -> List[InsurancePolicy]:
    return (
        db.query(InsurancePolicy)
        .filter(InsurancePolicy.end_date.is_(None))
        .order_by(InsurancePolicy.id)
        .all()
    )


def save(db: Session, policy: InsurancePolicy) -> InsurancePolicy:
    db.add(policy)
    db.flush()
    return policy


def delete(db: Session, policy: InsurancePolicy) -> None:
    db.delete(policy)
    db.flush()


def delete_all(db: Session, policies: Iterable[InsurancePolicy]) -> None:
    for policy in policies:
        db.delete(policy)
    db.flush()
