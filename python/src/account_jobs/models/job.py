"""
Job invocation models.

Both account jobs take the same request and return the same result shape,
so callers (task queues, HTTP handlers) branch on ``result.success``
instead of handling exceptions.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobRequest(BaseModel):
    """Payload a job is invoked with."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    user_id: str = Field(default="", alias="userId")
    user_email: str = Field(default="", alias="userEmail")


class JobResult(BaseModel):
    """Outcome of one job invocation. Returned to the caller, never stored."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    success: bool
    message: str
    account_id: Optional[str] = Field(default=None, alias="accountId")
    download_url: Optional[str] = Field(default=None, alias="downloadUrl")
    
    @classmethod
    def ok(
        cls,
        message: str,
        account_id: Optional[str] = None,
        download_url: Optional[str] = None
    ) -> "JobResult":
        return cls(
            success=True,
            message=message,
            account_id=account_id,
            download_url=download_url,
        )
    
    @classmethod
    def failed(cls, message: str) -> "JobResult":
        return cls(success=False, message=message)
    
    def to_wire(self) -> Dict[str, Any]:
        """Camel-cased dict without unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)
