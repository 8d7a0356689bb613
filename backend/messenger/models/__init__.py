"""Models package - Import all models for SQLAlchemy registration."""
from messenger.models.user import User
from messenger.models.message import Message, REMOVED_USER

__all__ = [
    "User",
    "Message",
    "REMOVED_USER",
]
