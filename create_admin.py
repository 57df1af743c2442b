"""
Create the first ADMIN account, or promote an existing user to ADMIN.

Usage: python create_admin.py admin@example.com
"""
import getpass
import logging
import sys
from sqlalchemy.orm import Session
from app.database import SessionLocal, init_db
from app.models.user import User, Role
from app.core.security import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_admin(db: Session, email: str, name: str = "", surname: str = "", password: str = "") -> User:
    """Promote the user with this email to ADMIN, creating the account if needed."""
    email = email.strip().lower()
    db_user = db.query(User).filter(User.email == email).first()

    if db_user:
        db_user.role = Role.ADMIN
        logger.info(f"Promoting existing user {db_user.id} to ADMIN")
    else:
        if not name.strip() or not surname.strip() or len(password) < 6:
            raise ValueError("Name, surname and a password of at least 6 characters are required")
        db_user = User(
            email=email,
            name=name.strip(),
            surname=surname.strip(),
            hashed_password=hash_password(password),
            role=Role.ADMIN,
        )
        db.add(db_user)
        logger.info(f"Creating ADMIN account for {email}")

    db.commit()
    db.refresh(db_user)
    return db_user


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        admin_email = sys.argv[1]
        exists = db.query(User).filter(User.email == admin_email.strip().lower()).first() is not None
        if exists:
            admin = create_admin(db, admin_email)
        else:
            admin = create_admin(
                db,
                admin_email,
                name=input("Name: "),
                surname=input("Surname: "),
                password=getpass.getpass("Password: "),
            )
        logger.info(f"✓ {admin.email} (ID: {admin.id}) is now an ADMIN")
    except Exception as e:
        db.rollback()
        logger.error(f"✗ Could not create admin: {str(e)}")
        sys.exit(1)
    finally:
        db.close()
