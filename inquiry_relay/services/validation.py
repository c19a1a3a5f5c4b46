"""Field validation and sanitization for inquiry submissions.

Each validate_* function takes one raw value from the request body and
returns either the sanitized value or None. Text is trimmed, then
length-checked (bounds inclusive), then HTML-escaped. Nothing is silently
corrected: a value is accepted as a whole or rejected.

validate_inquiry() runs the fields in a fixed order and raises on the first
failure, so a response carries exactly one error.
"""

import re

from markupsafe import Markup, escape

from inquiry_relay.errors import InquiryValidationError
from inquiry_relay.models.inquiry import InquirySubmission

# Simple email regex: not exhaustive, just sanity-check
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PRODUCT_CODES = ("CBB60", "CBB61")


def sanitize_html(value):
    """Escape & < > " ' and / so the text cannot be read as markup.

    Not idempotent: "&amp;" becomes "&amp;amp;". Only apply it to raw input.
    """
    # str() first: escape() passes Markup through untouched
    escaped = str(escape(str(value)))
    return Markup(escaped.replace("/", "&#x2F;"))


def _clean_text(value, min_length, max_length):
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not min_length <= len(trimmed) <= max_length:
        return None
    return trimmed


def _validate_text(value, min_length, max_length):
    trimmed = _clean_text(value, min_length, max_length)
    if trimmed is None:
        return None
    return sanitize_html(trimmed)


def validate_name(name):
    return _validate_text(name, 1, 100)


def validate_company(company):
    return _validate_text(company, 1, 200)


def validate_email(email):
    trimmed = _clean_text(email, 5, 255)
    if trimmed is None or not EMAIL_RE.match(trimmed):
        return None
    return sanitize_html(trimmed)


def validate_country(country):
    return _validate_text(country, 1, 100)


def validate_message(message):
    return _validate_text(message, 10, 5000)


def validate_products(products):
    """Keep recognized product codes, in first-seen order, without duplicates.

    Unrecognized entries are dropped. Returns None when the input is not a
    non-empty list or when nothing recognizable is left.
    """
    if not isinstance(products, (list, tuple)) or not products:
        return None
    kept = []
    for product in products:
        if isinstance(product, str) and product in PRODUCT_CODES and product not in kept:
            kept.append(product)
    if not kept:
        return None
    return tuple(sanitize_html(p) for p in kept)


# Evaluated in this order; the first failure is the one reported.
FIELD_RULES = (
    ("name", validate_name,
     "Invalid name. Please provide a valid name (1-100 characters)."),
    ("company", validate_company,
     "Invalid company name. Please provide a valid company name (1-200 characters)."),
    ("email", validate_email,
     "Invalid email address. Please provide a valid email."),
    ("country", validate_country,
     "Invalid country. Please provide a valid country (1-100 characters)."),
    ("products", validate_products,
     f"Please select at least one product ({' or '.join(PRODUCT_CODES)})."),
    ("message", validate_message,
     "Invalid message. Please provide a message (10-5000 characters)."),
)


def validate_inquiry(raw):
    """Validate a RawInquiry and return an InquirySubmission.

    Raises:
        InquiryValidationError: for the first field that fails, with a
            message naming the field and its constraint.
    """
    cleaned = {}
    for field, validator, message in FIELD_RULES:
        value = validator(getattr(raw, field))
        if value is None:
            raise InquiryValidationError(field, message)
        cleaned[field] = value
    return InquirySubmission(**cleaned)
