"""
User model for authentication and the user directory.
"""
from sqlalchemy import Column, String, Boolean, Date
from messenger.db.base import BaseModel


class User(BaseModel):
    """Directory entry; username is the public identity."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    name = Column(String(100), nullable=True)
    surname = Column(String(100), nullable=True)
    birthdate = Column(Date, nullable=True)
    gender = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    location = Column(String(100), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<User username={self.username!r} admin={self.is_admin}>"
