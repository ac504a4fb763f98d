"""Data access for the claim table."""

from typing import Iterable, List

from sqlalchemy.orm import Session

from app.models.claim import Claim


def list_by_car(db: Session, car_id: int) -> List[Claim]:
    """Claims of a car, most recent claim date first."""
    return (
        db.query(Claim)
        .filter(Claim.car_id == car_id)
        .order_by(Claim.claim_date.desc(), Claim.id.desc())
        .all()
    )


def save(db: Session, claim: Claim) -> Claim:
    db.add(claim)
    db.flush()
    return claim


def delete_all(db: Session, claims: Iterable[Claim]) -> None:
    for claim in claims:
        db.delete(claim)
    db.flush()
