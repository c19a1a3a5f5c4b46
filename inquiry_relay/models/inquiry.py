"""Inquiry data shapes.

RawInquiry is the untrusted request body, exactly as decoded from JSON.
InquirySubmission only comes out of services.validation.validate_inquiry()
and holds escaped text (markupsafe.Markup) in every field, so nothing
unvalidated can reach the email template or the mail provider.
"""

from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

FIELDS = ("name", "company", "email", "country", "products", "message")


@dataclass(frozen=True)
class RawInquiry:
    name: Any = None
    company: Any = None
    email: Any = None
    country: Any = None
    products: Any = None
    message: Any = None

    @classmethod
    def from_json(cls, data):
        """Pick the known keys out of a decoded JSON object. Extra keys are ignored."""
        return cls(**{key: data.get(key) for key in FIELDS})


@dataclass(frozen=True)
class InquirySubmission:
    name: Markup
    company: Markup
    email: Markup
    country: Markup
    products: tuple[Markup, ...]
    message: Markup

    @property
    def products_display(self):
        return Markup(", ").join(self.products)
