from sqlalchemy.orm import Session
from unisport.models.user import User, UserRole
from unisport.services.auth import get_password_hash
import logging
import os

logger = logging.getLogger(__name__)


def create_initial_admin(db: Session):
    """
    Creates the admin configured through INITIAL_ADMIN_EMAIL and
    INITIAL_ADMIN_PASSWORD when the users table is empty.
    """
    email = os.getenv("INITIAL_ADMIN_EMAIL")
    password = os.getenv("INITIAL_ADMIN_PASSWORD")
    if not email or not password:
        logger.info("INITIAL_ADMIN_EMAIL/INITIAL_ADMIN_PASSWORD not set, skipping admin seed")
        return

    if db.query(User).count() > 0:
        logger.info("Users already exist, initial admin not created")
        return

    db_user = User(
        name=os.getenv("INITIAL_ADMIN_NAME", "admin"),
        email=email,
        phone=None,
        hashed_password=get_password_hash(password),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(db_user)
    db.commit()
    logger.info(f"Initial admin created: {email}")
