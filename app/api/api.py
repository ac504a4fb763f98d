from fastapi import APIRouter

from app.api.endpoints import auth, cars, health, owners, policies

# Create API router
api_router = APIRouter()

# Include endpoint routers with appropriate prefixes and tags
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(owners.router, prefix="/owners", tags=["owners"])
api_router.include_router(cars.router, prefix="/cars", tags=["cars"])
api_router.include_router(policies.router, prefix="/policies", tags=["policies"])
