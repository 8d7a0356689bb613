"""
User service for authentication, single-field updates and the delete cascade.
"""
import logging
from datetime import date
from typing import Callable, Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from messenger.core.security import create_access_token, get_password_hash, verify_password
from messenger.core.token_registry import TokenRegistry
from messenger.models import User
from messenger.repositories.message_repository import MessageRepository
from messenger.repositories.user_repository import UserField, UserRepository
from messenger.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UnknownFieldError(ValueError):
    """Raised when an update names an attribute outside UserField."""


def _set_birthdate(user: User, value: str) -> None:
    try:
        user.birthdate = date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid birthdate '{value}', expected YYYY-MM-DD")


def _set_password(user: User, value: str) -> None:
    user.password = get_password_hash(value)


def _set_admin(user: User, value: str) -> None:
    user.is_admin = value.strip().lower() == "true"


def _plain_setter(attribute: str) -> Callable[[User, str], None]:
    def setter(user: User, value: str) -> None:
        setattr(user, attribute, value)
    return setter


FIELD_SETTERS: Dict[UserField, Callable[[User, str], None]] = {
    UserField.USERNAME: _plain_setter("username"),
    UserField.PASSWORD: _set_password,
    UserField.NAME: _plain_setter("name"),
    UserField.SURNAME: _plain_setter("surname"),
    UserField.BIRTHDATE: _set_birthdate,
    UserField.GENDER: _plain_setter("gender"),
    UserField.EMAIL: _plain_setter("email"),
    UserField.LOCATION: _plain_setter("location"),
    UserField.ISADMIN: _set_admin,
}


def login(db: Session, registry: TokenRegistry, username: str, password: str) -> Optional[str]:
    """Issue and register a token for valid credentials, None otherwise."""
    user = UserRepository(db).find_by_username(username)
    if not user or not verify_password(password, user.password):
        logger.info(f"Failed login for '{username}'")
        return None

    token = create_access_token(user.username, user.is_admin)
    registry.add(token)
    logger.info(f"User '{username}' logged in")
    return token


def create_user(db: Session, user_data: UserCreate) -> User:
    """Insert a new user. Constraint violations propagate as SQLAlchemyError."""
    user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        name=user_data.name,
        surname=user_data.surname,
        birthdate=user_data.birthdate,
        gender=user_data.gender,
        email=user_data.email,
        location=user_data.location,
        is_admin=user_data.is_admin,
    )
    try:
        UserRepository(db).save(user)
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info(f"Created user '{user.username}' (admin={user.is_admin})")
    return user


def update_user_field(db: Session, user: User, field: str, value: str) -> User:
    """Apply a single-field update to an existing user and persist it.

    Raises UnknownFieldError for unrecognized field names, ValueError for an
    unparseable value, SQLAlchemyError when the store rejects the change.
    """
    user_field = UserField.parse(field)
    if user_field is None:
        raise UnknownFieldError(f"Unknown user field '{field}'")

    FIELD_SETTERS[user_field](user, value)
    try:
        UserRepository(db).save(user)
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info(f"Updated field '{user_field.value}' of user '{user.username}'")
    return user


def delete_user(db: Session, registry: TokenRegistry, username: str) -> None:
    """Delete ``username`` and redirect its messages to the removed-user sentinel.

    Both message rewrites and the row deletion commit together or not at all.
    Active tokens of the user are revoked once the transaction has committed.
    """
    messages = MessageRepository(db)
    try:
        sent = messages.redirect_sender(username)
        received = messages.redirect_receiver(username)
        UserRepository(db).delete_by_username(username)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        f"Deleted user '{username}', redirected {sent} sent and {received} received message(s)"
    )
    registry.remove_for_user(username)
