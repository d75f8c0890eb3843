"""Outgoing email notification."""

from pydantic import BaseModel, ConfigDict, Field


class EmailNotification(BaseModel):
    """HTML email handed to a notification sender."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    sender: str = Field(alias="from")
    to: str
    subject: str
    html: str
