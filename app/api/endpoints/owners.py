from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.config import settings
from app.db.session import get_db
from app.schemas.car import CarResponse
from app.schemas.owner import OwnerCreate, OwnerResponse, OwnerUpdate
from app.services import car_service, owner_service

router = APIRouter(dependencies=[Depends(get_current_user)])

@router.get("/", response_model=List[OwnerResponse])
def list_owners(db: Session = Depends(get_db)):
    """Retrieve all owners."""
    return owner_service.list_owners(db)

@router.post("/", response_model=OwnerResponse, status_code=status.HTTP_201_CREATED)
def create_owner(owner_in: OwnerCreate, response: Response, db: Session = Depends(get_db)):
    """Create an owner. The email must not belong to another owner."""
    owner = owner_service.create_owner(db, owner_in)
    response.headers["Location"] = f"{settings.API_PREFIX}/owners/{owner.id}"
    return owner

@router.get("/{owner_id}", response_model=OwnerResponse)
def get_owner(owner_id: int, db: Session = Depends(get_db)):
    return owner_service.get_owner(db, owner_id)

@router.put("/{owner_id}", response_model=OwnerResponse)
def update_owner(owner_id: int, owner_in: OwnerUpdate, db: Session = Depends(get_db)):
    """Partially update an owner; null fields are left unchanged."""
    return owner_service.update_owner(db, owner_id, owner_in)

@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_owner(owner_id: int, db: Session = Depends(get_db)):
    """Delete an owner. Rejected with 400 while the owner still has cars."""
    owner_service.delete_owner(db, owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{owner_id}/cars", response_model=List[CarResponse])
def list_owner_cars(owner_id: int, db: Session = Depends(get_db)):
    return car_service.list_cars_by_owner(db, owner_id)
