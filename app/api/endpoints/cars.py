from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.config import settings
from app.db.session import get_db
from app.schemas.car import CarCreate, CarResponse, CarUpdate, InsuranceValidityResponse
from app.schemas.claim import ClaimCreate, ClaimResponse
from app.schemas.history import CarHistoryResponse
from app.services import car_service, claim_service

router = APIRouter(dependencies=[Depends(get_current_user)])

@router.get("/", response_model=List[CarResponse])
def list_cars(db: Session = Depends(get_db)):
    """Retrieve all cars with their owners."""
    return car_service.list_cars(db)

@router.post("/", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
def create_car(car_in: CarCreate, db: Session = Depends(get_db)):
    """
    Register a car for an existing owner.

    Fails with 409 if the VIN is already registered and 404 if the owner does not exist.
    """
    return car_service.create_car(db, car_in)

@router.get("/{car_id}", response_model=CarResponse)
def get_car(car_id: int, db: Session = Depends(get_db)):
    return car_service.get_car(db, car_id)

@router.put("/{car_id}", response_model=CarResponse)
def update_car(car_id: int, car_in: CarUpdate, db: Session = Depends(get_db)):
    """
    Partially update a car; null fields are left unchanged.

    All insurance policies of the car are deleted when the update succeeds.
    """
    return car_service.update_car(db, car_id, car_in)

@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_car(car_id: int, db: Session = Depends(get_db)):
    """Delete a car together with all its insurance policies and claims."""
    car_service.delete_car(db, car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{car_id}/insurance-valid", response_model=InsuranceValidityResponse)
def check_insurance_validity(
    car_id: int,
    date: str = Query(..., description="Date to check, YYYY-MM-DD, between 1900-01-01 and 2100-12-31"),
    db: Session = Depends(get_db)
):
    """Check whether the car is insured on the given date."""
    valid = car_service.is_insurance_valid(db, car_id, date)
    return InsuranceValidityResponse(car_id=car_id, date=date, valid=valid)

@router.post("/{car_id}/claims", response_model=ClaimResponse, status_code=status.HTTP_201_CREATED)
def create_claim(car_id: int, claim_in: ClaimCreate, response: Response, db: Session = Depends(get_db)):
    """File a new claim against the car."""
    claim = claim_service.create_claim(db, car_id, claim_in)
    response.headers["Location"] = f"{settings.API_PREFIX}/cars/{car_id}/claims/{claim.id}"
    return claim

@router.get("/{car_id}/claims", response_model=List[ClaimResponse])
def list_claims(car_id: int, db: Session = Depends(get_db)):
    """Claims of the car, most recent claim date first."""
    return claim_service.list_claims_by_car(db, car_id)

@router.get("/{car_id}/history", response_model=CarHistoryResponse)
def get_car_history(car_id: int, db: Session = Depends(get_db)):
    """Policy starts, policy expiries and claims of the car in chronological order."""
    return car_service.get_car_history(db, car_id)
