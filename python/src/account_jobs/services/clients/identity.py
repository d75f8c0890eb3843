"""Firebase Authentication identity service."""

import asyncio
import logging

from firebase_admin import auth

logger = logging.getLogger(__name__)


class FirebaseIdentityService:
    """IdentityService over ``firebase_admin.auth``."""
    
    def __init__(self, app=None):
        self.app = app
    
    async def delete_identity(self, user_id: str) -> None:
        """
        Delete the user's authentication record.
        
        Raises:
            firebase_admin.auth.UserNotFoundError: If no such user exists
        """
        # firebase_admin.auth is blocking
        await asyncio.to_thread(auth.delete_user, user_id, app=self.app)
        logger.info(f"Authentication identity deleted: {user_id}")
