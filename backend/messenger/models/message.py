"""
Message model for direct messages between users.
"""
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from messenger.db.base import BaseModel

# Written over sender/receiver when the referenced user is deleted
REMOVED_USER = "~ removed user ~"


class Message(BaseModel):
    """Direct message. Sender and receiver are plain usernames, not foreign keys."""
    __tablename__ = "messages"

    sender = Column(String(50), nullable=False, index=True)
    receiver = Column(String(50), nullable=False, index=True)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
