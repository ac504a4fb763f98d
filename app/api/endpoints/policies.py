from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.session import get_db
from app.schemas.auth import MessageResponse
from app.schemas.policy import InsurancePolicyCreate, InsurancePolicyResponse, InsurancePolicyUpdate
from app.services import policy_service

router = APIRouter(dependencies=[Depends(get_current_user)])

@router.post("/", response_model=InsurancePolicyResponse, status_code=status.HTTP_201_CREATED)
def create_policy(policy_in: InsurancePolicyCreate, db: Session = Depends(get_db)):
    """Create a policy for an existing car. Start and end date are required."""
    return policy_service.create_policy(db, policy_in)

@router.get("/", response_model=List[InsurancePolicyResponse])
def list_policies(db: Session = Depends(get_db)):
    return policy_service.list_policies(db)

@router.post("/fix-open-ended", response_model=MessageResponse)
def fix_open_ended_policies(db: Session = Depends(get_db)):
    """Set end_date = start_date + 1 year on every policy stored without an end date."""
    fixed = policy_service.fix_open_ended_policies(db)
    return MessageResponse(message=f"Open-ended policies have been fixed ({fixed} updated)")

@router.get("/car/{car_id}", response_model=List[InsurancePolicyResponse])
def list_policies_by_car(car_id: int, db: Session = Depends(get_db)):
    return policy_service.list_policies_by_car(db, car_id)

@router.get("/{policy_id}", response_model=InsurancePolicyResponse)
def get_policy(policy_id: int, db: Session = Depends(get_db)):
    return policy_service.get_policy(db, policy_id)

@router.put("/{policy_id}", response_model=InsurancePolicyResponse)
def update_policy(policy_id: int, policy_in: InsurancePolicyUpdate, db: Session = Depends(get_db)):
    """Update a policy. car_id and provider may be null to keep them; dates are required."""
    return policy_service.update_policy(db, policy_id, policy_in)

@router.delete("/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_policy(policy_id: int, db: Session = Depends(get_db)):
    policy_service.delete_policy(db, policy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
