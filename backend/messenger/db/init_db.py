"""
Database initialization script.

Creates all tables and, when INITIAL_ADMIN_USERNAME and INITIAL_ADMIN_PASSWORD
are set, seeds a bootstrap administrator so the admin-only endpoints are
reachable on an empty database.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from messenger.core.config import settings
from messenger.core.logging_config import configure_logging
from messenger.core.security import get_password_hash
from messenger.db.session import SessionLocal, init_db
from messenger.models import User

logger = logging.getLogger(__name__)


def seed_admin(db: Session, username: Optional[str], password: Optional[str]) -> Optional[User]:
    """Insert an admin user unless one with that username already exists."""
    if not username or not password:
        logger.info("No bootstrap admin configured, skipping seed")
        return None

    existing = db.query(User).filter(User.username == username).first()
    if existing:
        logger.info(f"Bootstrap admin '{username}' already exists")
        return existing

    admin = User(username=username, password=get_password_hash(password), is_admin=True)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Created bootstrap admin '{username}'")
    return admin


if __name__ == "__main__":
    configure_logging()
    logger.info("Initializing database...")
    init_db()
    db = SessionLocal()
    try:
        seed_admin(db, settings.INITIAL_ADMIN_USERNAME, settings.INITIAL_ADMIN_PASSWORD)
    finally:
        db.close()
    logger.info("Database initialized successfully!")
