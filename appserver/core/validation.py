from __future__ import annotations

import re
from urllib.parse import urlparse

from appserver.domain.errors import AppError, ErrorCode

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL.match(value.strip()))


def is_valid_website(value: str) -> bool:
    candidate = value.strip()
    if "://" not in candidate:
        candidate = f"http://{candidate}"
    parsed = urlparse(candidate)
    return parsed.scheme in {"http", "https"} and "." in parsed.netloc and " " not in parsed.netloc


def validate_contact(email: str | None, website: str | None) -> None:
    """Raise when a workspace email or website is present but malformed."""

    if email and not is_valid_email(email):
        raise AppError(ErrorCode.VALIDATION_FAILURE, "Please enter a valid email")
    if website and not is_valid_website(website):
        raise AppError(ErrorCode.VALIDATION_FAILURE, "Please enter a valid website")
