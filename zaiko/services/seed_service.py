"""
Seed Service - default data for a fresh database
"""
from sqlalchemy.orm import Session
import logging

from zaiko.core.security import get_password_hash
from zaiko.models import AppUser, Category

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin"
DEFAULT_CATEGORIES = ["Electronics", "Office Supplies", "Consumables", "Other"]

def seed_default_data(db: Session) -> None:
    """Create the admin user and default categories when missing"""
    admin = db.query(AppUser).filter(AppUser.username == DEFAULT_ADMIN_USERNAME).first()
    if not admin:
        db.add(AppUser(
            username=DEFAULT_ADMIN_USERNAME,
            hashed_password=get_password_hash(DEFAULT_ADMIN_PASSWORD),
            is_active=True
        ))
        db.commit()
        logger.info(
            f"Default admin user created (username: {DEFAULT_ADMIN_USERNAME}, "
            f"password: {DEFAULT_ADMIN_PASSWORD})"
        )

    if db.query(Category.id).first() is None:
        for name in DEFAULT_CATEGORIES:
            db.add(Category(name=name))
        db.commit()
        logger.info("Default categories created")
