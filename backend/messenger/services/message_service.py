"""
Message service for sending direct messages.
"""
import logging
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from messenger.models import Message
from messenger.repositories.message_repository import MessageRepository
from messenger.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class ReceiverNotFoundError(LookupError):
    """Raised when a message is addressed to a username that does not exist."""


def send_message(db: Session, sender: str, receiver: str, content: str) -> Message:
    """Persist a message from ``sender`` with a server-assigned timestamp."""
    if not UserRepository(db).exists_by_username(receiver):
        raise ReceiverNotFoundError(receiver)

    message = Message(
        sender=sender,
        receiver=receiver,
        content=content,
        timestamp=datetime.utcnow(),
    )
    try:
        MessageRepository(db).save(message)
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info(f"Message {message.id} sent from '{sender}' to '{receiver}'")
    return message
