"""
Import all models from their respective modules.
"""

from app.models.owner import Owner
from app.models.car import Car
from app.models.insurance_policy import InsurancePolicy
from app.models.claim import Claim
from app.models.user import User, UserRole

# Export all models
__all__ = [
    "Owner",
    "Car",
    "InsurancePolicy",
    "Claim",
    "User",
    "UserRole",
]
