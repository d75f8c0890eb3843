"""
Account job trigger endpoints.

Invoked by the task queue (or an admin tool) once per job. Both endpoints
answer 200 with a JobResult for success and for structured failures; only
a missing user id is a 400.

Usage:
    POST /api/v1/jobs/delete-account  {"userId": "...", "userEmail": "..."}
    POST /api/v1/jobs/export-data     {"userId": "...", "userEmail": "..."}
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from ...core.config import settings
from ...models import JobRequest
from ...services.clients import JobServices
from ...services.jobs import (
    AccountDeletionService,
    AccountLockRegistry,
    DataExportService,
    InvalidJobInputError,
)
from ..deps import get_account_locks, get_job_services, verify_api_secret

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    dependencies=[Depends(verify_api_secret)],
)


@router.post(
    "/delete-account",
    summary="Delete an account",
    description="Delete the account's workspace, identity and stored files"
)
async def delete_account(
    job: JobRequest,
    services: JobServices = Depends(get_job_services),
    locks: AccountLockRegistry = Depends(get_account_locks),
) -> Dict[str, Any]:
    service = AccountDeletionService(services, settings)
    try:
        async with locks.hold(job.user_id):
            result = await service.delete_account(job.user_id, job.user_email)
    except InvalidJobInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    
    return result.to_wire()


@router.post(
    "/export-data",
    summary="Export account data",
    description="Export the account's expenses as CSV and email a download link"
)
async def export_data(
    job: JobRequest,
    services: JobServices = Depends(get_job_services),
    locks: AccountLockRegistry = Depends(get_account_locks),
) -> Dict[str, Any]:
    service = DataExportService(services, settings)
    try:
        async with locks.hold(job.user_id):
            result = await service.export_data(job.user_id, job.user_email)
    except InvalidJobInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    
    return result.to_wire()
