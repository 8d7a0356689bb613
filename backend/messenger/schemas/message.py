"""
Pydantic schemas for Message entity.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class MessageCreate(BaseModel):
    """Schema for sending a message. Sender and timestamp are assigned by the server."""
    receiver: str = Field(min_length=1)
    content: str


class MessageResponse(BaseModel):
    """Schema for message response."""
    id: int
    sender: str
    receiver: str
    content: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
