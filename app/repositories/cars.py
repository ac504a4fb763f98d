"""Data access for the car table."""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.car import Car


def get_by_id(db: Session, car_id: int) -> Optional[Car]:
    return db.get(Car, car_id)


def get_by_vin(db: Session, vin: str) -> Optional[Car]:
    return db.query(Car).filter(Car.vin == vin).first()


def exists_by_id(db: Session, car_id: int) -> bool:
    return db.query(Car.id).filter(Car.id == car_id).first() is not None


def list_all(db: Session) -> List[Car]:
    return db.query(Car).order_by(Car.id).all()


def list_by_owner(db: Session, owner_id: int) -> List[Car]:
    return db.query(Car).filter(Car.owner_id == owner_id).order_by(Car.id).all()


def count_by_owner(db: Session, owner_id: int) -> int:
    return db.query(Car).filter(Car.owner_id == owner_id).count()


def save(db: Session, car: Car) -> Car:
    db.add(car)
    db.flush()
    return car


def delete(db: Session, car: Car) -> None:
    db.delete(car)
    db.flush()
