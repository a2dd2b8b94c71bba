import logging
from typing import Dict

from ..errors import ApiError, FormValidationError
from ..forms import ContactForm
from ..models import ContactMessage
from .base import View

logger = logging.getLogger("saffron.web.contact")


class ContactView(View):
    """Contact form. Status is one of "", "loading", "success", "error"."""

    def __init__(self, context):
        super().__init__(context)
        self.form = ContactForm()
        self.field_errors: Dict[str, str] = {}
        self.status = ""

    def submit(self) -> bool:
        try:
            self.form.validate()
        except FormValidationError as e:
            self.field_errors = e.errors
            return False
        self.field_errors = {}

        self.status = "loading"
        try:
            self.api.send_contact_message(ContactMessage(**self.form.to_dict()))
        except ApiError as e:
            logger.error(f"Failed to send contact message: {e}")
            self.status = "error"
            self.error = "Failed to send your message. Please try again later."
            return False

        self.status = "success"
        self.error = None
        self.form.clear()
        return True
