# create_tables.py
import logging

from taskbridge.database import Base, SessionLocal, engine
from taskbridge.models import User, Role
from taskbridge.utils.security import hash_password

logger = logging.getLogger("taskbridge.create_tables")

# One account per role so a fresh install can be explored immediately
DEMO_ACCOUNTS = [
    ("System Admin", "admin@test.com", Role.ADMIN),
    ("Demo Manager", "manager@test.com", Role.MANAGER),
    ("Demo User", "user@test.com", Role.USER),
]
DEMO_PASSWORD = "password"


def create_tables():
    """Create all tables"""
    Base.metadata.create_all(bind=engine)
    logger.info("✅ All tables created successfully!")


def seed_demo_accounts():
    """Insert the demo accounts that are not there yet"""
    db = SessionLocal()
    try:
        created = 0
        for name, email, role in DEMO_ACCOUNTS:
            if db.query(User).filter(User.email == email).first():
                continue
            db.add(User(
                name=name,
                email=email,
                hashed_password=hash_password(DEMO_PASSWORD),
                role=role,
            ))
            created += 1
        db.commit()
        logger.info("✅ Seeded %d demo account(s)", created)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    create_tables()
    seed_demo_accounts()
