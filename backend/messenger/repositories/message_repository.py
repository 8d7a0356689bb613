"""
Repository for Message: mailbox queries and sentinel rewrites.
"""
import enum
from typing import List, Optional, Tuple
from sqlalchemy import String, false, func
from sqlalchemy.orm import Session
from messenger.models import Message, REMOVED_USER
from messenger.repositories.base import SqlAlchemyRepository


class Mailbox(str, enum.Enum):
    """Which side of the conversation the caller is on."""
    INBOX = "in"
    OUTBOX = "out"

    @classmethod
    def parse(cls, inout: Optional[str]) -> Optional["Mailbox"]:
        if inout is None:
            return None
        try:
            return cls(inout.lower())
        except ValueError:
            return None


# Filterable fields per mailbox. Inbox messages are filtered by who sent
# them, outbox messages by who received them.
_FILTER_COLUMNS = {
    Mailbox.INBOX: {"sender": Message.sender, "content": Message.content},
    Mailbox.OUTBOX: {"receiver": Message.receiver, "content": Message.content},
}

_OWNER_COLUMN = {
    Mailbox.INBOX: Message.receiver,
    Mailbox.OUTBOX: Message.sender,
}


def message_filter_clause(mailbox: Mailbox, field: Optional[str], value: str):
    """Case-insensitive substring on a field allowed for ``mailbox``; anything else matches nothing."""
    column = _FILTER_COLUMNS[mailbox].get((field or "").lower())
    if column is None:
        return false()
    return func.lower(column, type_=String).contains(value.lower(), autoescape=True)


class MessageRepository(SqlAlchemyRepository[Message]):
    def __init__(self, session: Session):
        super().__init__(session, Message)

    def find_mailbox_page(
        self,
        mailbox: Mailbox,
        username: str,
        page: int,
        size: int,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ) -> Tuple[List[Message], int]:
        """Messages owned by ``username`` in ``mailbox``, optionally filtered."""
        query = self.session.query(Message).filter(_OWNER_COLUMN[mailbox] == username)
        if field is not None and value is not None:
            query = query.filter(message_filter_clause(mailbox, field, value))
        return self.paginate(query, page, size)

    def redirect_sender(self, username: str) -> int:
        """Point messages sent by ``username`` at the removed-user sentinel. Does not commit."""
        return (
            self.session.query(Message)
            .filter(Message.sender == username)
            .update({Message.sender: REMOVED_USER}, synchronize_session=False)
        )

    def redirect_receiver(self, username: str) -> int:
        """Point messages received by ``username`` at the removed-user sentinel. Does not commit."""
        return (
            self.session.query(Message)
            .filter(Message.receiver == username)
            .update({Message.receiver: REMOVED_USER}, synchronize_session=False)
        )
