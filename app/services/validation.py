"""Pure payload checks run before any write reaches the store.

Each validator returns a new payload with trimmed strings or raises the first
InputValidationError it finds, in field declaration order.
"""
from decimal import Decimal
from typing import Optional
from urllib.parse import urlparse
import re

from app.errors import (
    FieldFormatError,
    FieldLengthError,
    FieldRangeError,
    FieldRequiredError,
    MissingDataError,
)
from app.schemas.owner import OwnerCreate
from app.schemas.property import PropertyCreate

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PROPERTY_LIMITS = {
    "id_owner": (1, 50),
    "name": (2, 100),
    "address": (5, 200),
}
MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal(10) ** 16

OWNER_LIMITS = {
    "name": (2, 100),
    "email": (3, 254),
    "phone": (5, 30),
}

def require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise FieldRequiredError(field)
    return value.strip()

def check_length(value: str, field: str, min_length: int, max_length: int) -> str:
    if not min_length <= len(value) <= max_length:
        raise FieldLengthError(field, min_length, max_length)
    return value

def check_price(value: Optional[Decimal], field: str = "price") -> Decimal:
    """Price must fit the Numeric(18, 2) column exactly, so what is stored is what was sent."""
    if value is None:
        raise FieldRequiredError(field)
    if not value.is_finite() or value < MIN_PRICE:
        raise FieldRangeError(field, f"{field} must be at least {MIN_PRICE}")
    if value >= MAX_PRICE:
        raise FieldRangeError(field, f"{field} must be less than {MAX_PRICE}")
    if value != value.quantize(MIN_PRICE):
        raise FieldFormatError(field, "amount with at most 2 decimal places")
    return value

def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))

def is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)

def validate_property(payload: Optional[PropertyCreate]) -> PropertyCreate:
    if payload is None:
        raise MissingDataError("Property")
    values = {}
    for field, (low, high) in PROPERTY_LIMITS.items():
        text = require_text(getattr(payload, field), field)
        values[field] = check_length(text, field, low, high)
    values["price"] = check_price(payload.price)
    image = require_text(payload.image, "image")
    if not is_http_url(image):
        raise FieldFormatError("image", "URL")
    values["image"] = image
    return payload.model_copy(update=values)

def validate_owner(payload: Optional[OwnerCreate]) -> OwnerCreate:
    if payload is None:
        raise MissingDataError("Owner")
    values = {}
    for field, (low, high) in OWNER_LIMITS.items():
        text = require_text(getattr(payload, field), field)
        values[field] = check_length(text, field, low, high)
        if field == "email" and not is_email(values[field]):
            raise FieldFormatError(field, "email address")
    return payload.model_copy(update=values)
