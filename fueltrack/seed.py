"""
Create tables, default settings and the first admin account.

    ADMIN_PASSWORD='ChangeMe123' python -m fueltrack.seed
"""
import logging
import sys

from fueltrack.config import settings
from fueltrack.database import SessionLocal, create_tables
from fueltrack.models.user import User, RoleName
from fueltrack.services.system_setting_service import system_setting_service
from fueltrack.schemas.auth import validate_password_strength
from fueltrack.utils.security import hash_password

logger = logging.getLogger(__name__)


def seed_admin(db, username: str, password: str) -> bool:
    """Create the admin user unless the username is taken. Returns True if created."""
    if db.query(User).filter(User.username == username).first():
        logger.info(f"User '{username}' already exists, leaving it untouched")
        return False
    db.add(User(
        username=username,
        password=hash_password(password),
        role=RoleName.ADMIN,
        isActive=True,
    ))
    db.commit()
    logger.info(f"Admin user '{username}' created")
    return True


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    create_tables()
    db = SessionLocal()
    try:
        system_setting_service.seed_defaults(db)
        if not settings.ADMIN_PASSWORD:
            logger.warning("ADMIN_PASSWORD not set; skipping admin user")
            return 0
        try:
            validate_password_strength(settings.ADMIN_PASSWORD)
        except ValueError as e:
            logger.error(f"ADMIN_PASSWORD rejected: {e}")
            return 1
        seed_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
