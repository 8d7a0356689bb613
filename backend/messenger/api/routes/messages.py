"""
Message routes: mailbox listing and sending.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
from messenger.core.config import settings
from messenger.core.security import TokenData
from messenger.db.session import get_db
from messenger.repositories.message_repository import Mailbox, MessageRepository
from messenger.schemas.message import MessageCreate, MessageResponse
from messenger.schemas.page import Page
from messenger.services.message_service import ReceiverNotFoundError, send_message
from messenger.api.dependencies import get_current_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/message", tags=["message"])


@router.get("", response_model=Page[MessageResponse])
async def list_messages(
    inout: str = Query(...),
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    field: Optional[str] = None,
    value: Optional[str] = None,
    current: TokenData = Depends(get_current_token),
    db: Session = Depends(get_db)
):
    """List the caller's inbox (inout=in) or outbox (inout=out)."""
    mailbox = Mailbox.parse(inout)
    if mailbox is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="inout must be 'in' or 'out'"
        )

    try:
        messages, total = MessageRepository(db).find_mailbox_page(
            mailbox, current.username, page, size, field, value
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to list {mailbox.name.lower()} of '{current.username}': {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    if not messages:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    content = [MessageResponse.model_validate(m) for m in messages]
    return Page[MessageResponse].build(content, page, size, total)


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    message_data: MessageCreate,
    current: TokenData = Depends(get_current_token),
    db: Session = Depends(get_db)
):
    """Send a message from the caller to an existing user."""
    try:
        return send_message(db, current.username, message_data.receiver, message_data.content)
    except ReceiverNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Receiver not found"
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to send message from '{current.username}': {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )
