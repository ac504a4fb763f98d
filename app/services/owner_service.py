"""
Owner operations. An owner can only be removed once it owns no cars.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from app.db.session import transaction
from app.models.owner import Owner
from app.repositories import cars as car_repository
from app.repositories import owners as owner_repository
from app.schemas.owner import OwnerCreate, OwnerUpdate

logger = logging.getLogger(__name__)

def _get_owner_or_raise(db: Session, owner_id: int) -> Owner:
    owner = owner_repository.get_by_id(db, owner_id)
    if owner is None:
        raise ResourceNotFoundError(f"Owner not found with id: {owner_id}")
    return owner

def list_owners(db: Session) -> List[Owner]:
    logger.info("Fetching all owners")
    return owner_repository.list_all(db)

def get_owner(db: Session, owner_id: int) -> Owner:
    logger.info(f"Fetching owner with id: {owner_id}")
    return _get_owner_or_raise(db, owner_id)

def create_owner(db: Session, owner_in: OwnerCreate) -> Owner:
    logger.info(f"Creating new owner with email: {owner_in.email}")

    try:
        with transaction(db):
            if owner_repository.exists_by_email(db, owner_in.email):
                raise ConflictError(f"Owner with email {owner_in.email} already exists")
            owner = owner_repository.save(db, Owner(name=owner_in.name, email=owner_in.email))
    except IntegrityError:
        # Another request stored the same email after the lookup above
        logger.warning(f"Unique constraint violated creating owner with email: {owner_in.email}")
        raise ConflictError(f"Owner with email {owner_in.email} already exists") from None

    db.refresh(owner)
    logger.info(f"Successfully created owner with id: {owner.id}")
    return owner

def update_owner(db: Session, owner_id: int, owner_in: OwnerUpdate) -> Owner:
    """Apply a partial update. Fields left as None keep their stored value."""
    logger.info(f"Updating owner with id: {owner_id}")

    try:
        with transaction(db):
            owner = _get_owner_or_raise(db, owner_id)

            if owner_in.email is not None and owner_in.email != owner.email:
                existing = owner_repository.get_by_email(db, owner_in.email)
                if existing is not None and existing.id != owner.id:
                    raise ConflictError(f"Owner with email {owner_in.email} already exists")
                owner.email = owner_in.email

            if owner_in.name is not None:
                owner.name = owner_in.name

            owner_repository.save(db, owner)
    except IntegrityError:
        logger.warning(f"Unique constraint violated updating owner with id: {owner_id}")
        raise ConflictError(f"Owner with email {owner_in.email} already exists") from None

    db.refresh(owner)
    logger.info(f"Successfully updated owner with id: {owner.id}")
    return owner

def delete_owner(db: Session, owner_id: int) -> None:
    logger.info(f"Deleting owner with id: {owner_id}")

    with transaction(db):
        owner = _get_owner_or_raise(db, owner_id)

        car_count = car_repository.count_by_owner(db, owner_id)
        if car_count > 0:
            raise ValidationError(
                f"Cannot delete owner with id {owner_id} because they own {car_count} car(s). "
                "Please reassign or delete the cars first."
            )

        owner_repository.delete(db, owner)

    logger.info(f"Successfully deleted owner with id: {owner_id}")
