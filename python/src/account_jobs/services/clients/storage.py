"""
Cloud Storage blob service.

Wraps a ``google.cloud.storage.Bucket`` (as returned by
``firebase_admin.storage.bucket``). The storage SDK is blocking, so every
call is off-loaded to a worker thread.
"""

import asyncio
import logging
from datetime import timedelta

from google.auth.credentials import Signing
from google.auth.transport.requests import Request

logger = logging.getLogger(__name__)


class CloudStorageBlobStorage:
    """BlobStorage over a single Cloud Storage bucket."""
    
    def __init__(self, bucket, credentials=None):
        self.bucket = bucket
        self.credentials = credentials
        logger.info(f"Blob storage bound to bucket: {bucket.name}")
    
    async def delete_by_prefix(self, prefix: str) -> None:
        """Delete every blob whose name starts with ``prefix``."""
        def _delete() -> int:
            blobs = list(self.bucket.list_blobs(prefix=prefix))
            if blobs:
                self.bucket.delete_blobs(blobs)
            return len(blobs)
        
        deleted = await asyncio.to_thread(_delete)
        logger.info(f"Deleted {deleted} blobs under {prefix}")
    
    async def upload(self, local_path: str, remote_path: str, content_type: str) -> None:
        blob = self.bucket.blob(remote_path)
        await asyncio.to_thread(
            blob.upload_from_filename,
            local_path,
            content_type=content_type,
        )
        logger.info(f"Uploaded {local_path} to {self.bucket.name}/{remote_path}")
    
    async def get_signed_read_url(self, remote_path: str, expiry: timedelta) -> str:
        """
        V4 signed GET url for ``remote_path``, valid for ``expiry``.
        
        Token-only credentials (Compute Engine / Cloud Run ADC) hold no
        private key, so the URL is signed through the IAM signBlob API with
        the service account email and a fresh access token instead.
        """
        blob = self.bucket.blob(remote_path)
        
        def _sign() -> str:
            kwargs = {}
            if self.credentials is not None and not isinstance(self.credentials, Signing):
                self.credentials.refresh(Request())
                kwargs["service_account_email"] = self.credentials.service_account_email
                kwargs["access_token"] = self.credentials.token
            return blob.generate_signed_url(
                version="v4",
                expiration=expiry,
                method="GET",
                **kwargs,
            )
        
        return await asyncio.to_thread(_sign)
