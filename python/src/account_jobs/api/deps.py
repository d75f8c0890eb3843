"""
FastAPI dependencies for the job trigger surface.
"""

import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from ..core.config import settings
from ..services.clients import JobServices
from ..services.jobs import AccountLockRegistry

logger = logging.getLogger(__name__)


def verify_api_secret(x_api_secret: Optional[str] = Header(default=None)) -> None:
    """
    Reject requests that do not carry the shared trigger secret.
    
    Raises:
        HTTPException 401: If the X-API-Secret header is missing or wrong
    """
    if not x_api_secret or not hmac.compare_digest(
        x_api_secret.encode(), settings.API_SECRET.encode()
    ):
        logger.warning("Job trigger rejected: invalid API secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API secret",
        )


def get_job_services(request: Request) -> JobServices:
    """Collaborator handles created during application startup."""
    services = getattr(request.app.state, "job_services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Job services not initialized",
        )
    return services


def get_account_locks(request: Request) -> AccountLockRegistry:
    return request.app.state.account_locks
