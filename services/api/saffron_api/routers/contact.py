import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import ContactMessage
from ..ratelimit import limiter
from ..schemas import ContactMessageCreate, ContactMessageOut
from ..settings import settings

router = APIRouter()
logger = logging.getLogger("saffron.contact")


@router.post("/contact/messages", response_model=ContactMessageOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.contact_rate_limit)
def create_contact_message(
    request: Request,
    payload: ContactMessageCreate,
    db: Session = Depends(get_db),
):
    """Store a message from the public contact form."""
    message = ContactMessage(**payload.model_dump())
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.info(f"Contact message {message.id} received (subject={message.subject!r})")
    return message
