import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError
from app.db.session import transaction
from app.models.claim import Claim
from app.repositories import cars as car_repository
from app.repositories import claims as claim_repository
from app.schemas.claim import ClaimCreate

logger = logging.getLogger(__name__)

def create_claim(db: Session, car_id: int, claim_in: ClaimCreate) -> Claim:
    logger.info(f"Creating claim for car: {car_id}")

    with transaction(db):
        if not car_repository.exists_by_id(db, car_id):
            raise ResourceNotFoundError(f"Car not found with id: {car_id}")
        claim = claim_repository.save(db, Claim(
            car_id=car_id,
            claim_date=claim_in.claim_date,
            description=claim_in.description,
            amount=claim_in.amount,
        ))

    db.refresh(claim)
    logger.info(f"Successfully created claim with id: {claim.id} for car: {car_id}")
    return claim

def list_claims_by_car(db: Session, car_id: int) -> List[Claim]:
    logger.info(f"Fetching claims for car: {car_id}")

    if not car_repository.exists_by_id(db, car_id):
        raise ResourceNotFoundError(f"Car not found with id: {car_id}")
    return claim_repository.list_by_car(db, car_id)
