"""
FastAPI application entry point.

Hosts the account lifecycle job triggers:
- Account deletion and data export endpoints
- Health checks
- Prometheus metrics
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from .core.config import settings
from .monitoring import init_sentry
from .services.jobs import AccountLockRegistry

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.
    
    Creates the collaborator handles every job invocation receives. Handles
    already placed on ``app.state`` (tests, embedding apps) are kept.
    """
    logger.info("Starting account jobs API...")
    
    init_sentry(settings)
    
    if getattr(app.state, "job_services", None) is None:
        from .core.firebase import initialize_firebase
        app.state.job_services = initialize_firebase(settings)
        logger.info("Firebase job services initialized")
    
    logger.info("API started successfully")
    
    yield
    
    logger.info("Account jobs API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="BudgetByMe Account Jobs API",
    description="Account deletion and data export jobs",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.account_locks = AccountLockRegistry()

# Mount Prometheus metrics endpoint
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "components": {
            "job_services": "ready" if getattr(app.state, "job_services", None) else "not_initialized",
        }
    }


@app.get("/health/ready")
async def readiness_check():
    """Returns 200 only when job services are available."""
    if getattr(app.state, "job_services", None) is None:
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return {"status": "ready"}


@app.get("/health/live")
async def liveness_check():
    """Returns 200 if the service is alive (even if not ready)."""
    return {"status": "alive"}


# Include API routers
from .api.v1 import jobs_router
app.include_router(jobs_router, prefix=settings.API_V1_PREFIX)


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "src.account_jobs.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
