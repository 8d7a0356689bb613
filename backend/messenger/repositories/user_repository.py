"""
Repository for User, including the dynamic field/value filter.
"""
import enum
from typing import List, Optional, Tuple
from sqlalchemy import String, cast, false, func
from sqlalchemy.orm import Session
from messenger.models import User
from messenger.repositories.base import SqlAlchemyRepository


class UserField(str, enum.Enum):
    """User attributes addressable by the list filter and the single-field update."""
    USERNAME = "username"
    PASSWORD = "password"
    NAME = "name"
    SURNAME = "surname"
    BIRTHDATE = "birthdate"
    GENDER = "gender"
    EMAIL = "email"
    LOCATION = "location"
    ISADMIN = "isadmin"

    @classmethod
    def parse(cls, field: Optional[str]) -> Optional["UserField"]:
        """Case-insensitive lookup; None for unknown names."""
        if field is None:
            return None
        try:
            return cls(field.lower())
        except ValueError:
            return None


# Columns filtered by case-insensitive substring
_SUBSTRING_COLUMNS = {
    UserField.USERNAME: User.username,
    UserField.NAME: User.name,
    UserField.SURNAME: User.surname,
    UserField.EMAIL: User.email,
    UserField.LOCATION: User.location,
}


def _contains_ci(column, value: str):
    return func.lower(column, type_=String).contains(value.lower(), autoescape=True)


def user_filter_clause(field: Optional[str], value: str):
    """Build the WHERE clause for a field/value filter.

    Substring fields match case-insensitively, gender matches exactly
    (ignoring case), birthdate matches a substring of its ISO form and isadmin
    compares against "true"/"false". Unknown fields, including password,
    match nothing.
    """
    user_field = UserField.parse(field)
    if user_field in _SUBSTRING_COLUMNS:
        return _contains_ci(_SUBSTRING_COLUMNS[user_field], value)
    if user_field is UserField.GENDER:
        return func.lower(User.gender) == value.lower()
    if user_field is UserField.BIRTHDATE:
        return cast(User.birthdate, String).contains(value, autoescape=True)
    if user_field is UserField.ISADMIN:
        flag = value.lower()
        if flag == "true":
            return User.is_admin.is_(True)
        if flag == "false":
            return User.is_admin.is_(False)
    return false()


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session: Session):
        super().__init__(session, User)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()

    def exists_by_username(self, username: str) -> bool:
        return self.session.query(
            self.session.query(User).filter(User.username == username).exists()
        ).scalar()

    def find_page(self, page: int, size: int) -> Tuple[List[User], int]:
        return self.paginate(self.session.query(User), page, size)

    def find_page_by_field(self, field: str, value: str, page: int, size: int) -> Tuple[List[User], int]:
        query = self.session.query(User).filter(user_filter_clause(field, value))
        return self.paginate(query, page, size)

    def search_usernames(self, fragment: str) -> List[str]:
        """Usernames containing ``fragment`` (case-insensitive), unpaginated."""
        rows = (
            self.session.query(User.username)
            .filter(_contains_ci(User.username, fragment))
            .order_by(User.id)
            .all()
        )
        return [row.username for row in rows]

    def delete_by_username(self, username: str) -> int:
        """Delete without committing; returns the number of rows removed."""
        return (
            self.session.query(User)
            .filter(User.username == username)
            .delete(synchronize_session=False)
        )
