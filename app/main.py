import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.api import api_router
from app.api.errors import register_exception_handlers
from app.core.config import settings
from app.core.middleware import add_middleware
from app.db.session import SessionLocal
from app.services.policy_expiration import PolicyExpirationChecker

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the hourly policy expiry scan and stop it on shutdown."""
    logger.info("Starting car insurance service...")
    task = None
    if settings.POLICY_EXPIRATION_CHECK_ENABLED:
        task = asyncio.create_task(
            app.state.expiration_checker.run_forever(
                SessionLocal, settings.POLICY_EXPIRATION_CHECK_SECONDS
            )
        )
    app.state.expiration_task = task
    yield
    if task is not None:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
    logger.info("Car insurance service stopped")

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Car insurance API: owners, cars, insurance policies and claims",
    version="0.1.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.expiration_checker = PolicyExpirationChecker()

# Middleware added last runs first: CORS wraps authentication
add_middleware(app)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/")
async def root():
    """Root endpoint with basic service information."""
    return {
        "message": "Welcome to the Car Insurance Service API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
