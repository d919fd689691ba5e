# stash/data/seed.py
"""
Bootstrap data. Roles other than customer are never assigned over HTTP, so
the first admin account comes from here.

    ADMIN_EMAIL=... ADMIN_PASSWORD=... python -m stash.data.seed
"""
from stash.data.database import Base, SessionLocal, engine
from stash.repos.user_repo import UserRepo
from stash.services.user_service import UserService
from stash.utils.logging import get_logger
from stash.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD

import stash.data.models  # noqa: F401

logger = get_logger(__name__)


def seed_admin(db, email: str | None = ADMIN_EMAIL, password: str | None = ADMIN_PASSWORD) -> bool:
    # not forcing: only seed if configured and missing
    if not email or not password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin seed")
        return False
    if UserRepo(db).get_user_by_email(email.lower()):
        return False

    UserService(db).register(email, password, roles=["admin"])
    logger.info(f"Admin account {email} created")
    return True


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
