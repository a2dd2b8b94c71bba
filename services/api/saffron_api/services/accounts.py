import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models import AdminAccount
from ..settings import settings
from .auth import hash_password

logger = logging.getLogger("saffron.accounts")


def create_admin(db: Session, *, username: str, email: str, password: str) -> AdminAccount:
    """Create an admin account. Caller commits."""
    admin = AdminAccount(
        username=username.strip(),
        email=email.strip(),
        password_hash=hash_password(password),
    )
    db.add(admin)
    return admin


def ensure_bootstrap_admin(db: Session) -> Optional[AdminAccount]:
    """Create the configured admin account if it does not exist yet.

    Returns the new account, or None when nothing was configured or the
    account already exists.
    """
    username = settings.admin_username
    password = settings.admin_password
    if not username or not password:
        return None
    email = settings.admin_email or f"{username}@localhost"

    existing = (
        db.query(AdminAccount)
        .filter(or_(AdminAccount.username == username, AdminAccount.email == email))
        .first()
    )
    if existing:
        return None

    admin = create_admin(db, username=username, email=email, password=password)
    db.commit()
    db.refresh(admin)
    logger.info(f"Created bootstrap admin account {admin.username}")
    return admin
