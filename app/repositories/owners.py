"""Data access for the owner table."""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.owner import Owner


def get_by_id(db: Session, owner_id: int) -> Optional[Owner]:
    return db.get(Owner, owner_id)


def get_by_email(db: Session, email: str) -> Optional[Owner]:
    return db.query(Owner).filter(Owner.email == email).first()


def exists_by_email(db: Session, email: str) -> bool:
    return db.query(Owner.id).filter(Owner.email == email).first() is not None


def list_all(db: Session) -> List[Owner]:
    return db.query(Owner).order_by(Owner.id).all()


def save(db: Session, owner: Owner) -> Owner:
    db.add(owner)
    db.flush()
    return owner


def delete(db: Session, owner: Owner) -> None:
    db.delete(owner)
    db.flush()
