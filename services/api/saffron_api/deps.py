"""FastAPI dependencies for the Saffron API.

Provides:
- Database session dependency
- Admin resolution from the bearer token
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from .db import get_db
from .models import AdminAccount
from .services.auth import TokenError, decode_token

logger = logging.getLogger("saffron.auth")


def get_current_admin(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> AdminAccount:
    """Resolve the admin account from `Authorization: Bearer <token>`.

    Raises:
        HTTPException 401 if the header is missing, the token is invalid or
        expired, or the account no longer exists
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Authorization must be a Bearer token")

    try:
        payload = decode_token(token.strip())
    except TokenError as e:
        logger.info(f"Rejected admin token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    admin = db.get(AdminAccount, payload["admin_id"])
    if admin is None:
        raise HTTPException(status_code=401, detail="Admin account not found")
    return admin
