"""Client-side form validation. A form with errors never reaches the network."""

import re
from dataclasses import asdict, dataclass
from typing import Dict

from .errors import FormValidationError

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


@dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""

    def errors(self) -> Dict[str, str]:
        """Field -> message for every invalid field (empty when valid)."""
        errors = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        if not self.email.strip():
            errors["email"] = "Email is required"
        elif not EMAIL_PATTERN.search(self.email):
            errors["email"] = "Invalid email address"
        if not self.subject.strip():
            errors["subject"] = "Subject is required"
        if not self.message.strip():
            errors["message"] = "Message is required"
        return errors

    def validate(self) -> None:
        errors = self.errors()
        if errors:
            raise FormValidationError(errors)

    def clear(self) -> None:
        self.name = self.email = self.subject = self.message = ""

    def to_dict(self) -> Dict[str, str]:
        return {k: v.strip() for k, v in asdict(self).items()}


@dataclass
class LoginForm:
    identifier: str = ""
    password: str = ""

    def validate(self) -> None:
        errors = {}
        if not self.identifier.strip():
            errors["identifier"] = "Username or email is required"
        if not self.password:
            errors["password"] = "Password is required"
        if errors:
            raise FormValidationError(errors)
