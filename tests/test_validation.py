"""Tests for field validation and sanitization.

Covers:
- HTML escaping of the five special characters and "/"
- Double escaping (not idempotent)
- Trim-then-length-check boundaries for every text field
- Email format rules
- Product whitelist filtering
- Fail-fast ordering in validate_inquiry
"""

import pytest
from markupsafe import Markup

from inquiry_relay.errors import InquiryValidationError
from inquiry_relay.models.inquiry import InquirySubmission, RawInquiry
from inquiry_relay.services import validation
from inquiry_relay.services.validation import (
    sanitize_html,
    validate_company,
    validate_country,
    validate_email,
    validate_inquiry,
    validate_message,
    validate_name,
    validate_products,
)


class TestSanitizeHtml:

    def test_escapes_special_characters(self):
        assert sanitize_html("<a href='x'>\"&/") == (
            "&lt;a href=&#39;x&#39;&gt;&#34;&amp;&#x2F;"
        )

    def test_plain_text_unchanged(self):
        assert sanitize_html("Acme Corp") == "Acme Corp"

    def test_returns_markup(self):
        assert isinstance(sanitize_html("x"), Markup)

    def test_double_escaping_is_visible(self):
        """Escaping already-escaped text escapes the ampersands again."""
        once = sanitize_html("Tom & Jerry")
        twice = sanitize_html(once)
        assert once == "Tom &amp; Jerry"
        assert twice == "Tom &amp;amp; Jerry"

    def test_double_escaping_slash(self):
        assert sanitize_html(sanitize_html("a/b")) == "a&amp;#x2F;b"


class TestTextLengthBoundaries:

    @pytest.mark.parametrize("validator, low, high", [
        (validate_name, 1, 100),
        (validate_company, 1, 200),
        (validate_country, 1, 100),
        (validate_message, 10, 5000),
    ])
    def test_bounds_inclusive(self, validator, low, high):
        assert validator("a" * low) == "a" * low
        assert validator("a" * high) == "a" * high
        assert validator("a" * (high + 1)) is None
        assert validator("a" * (low - 1)) is None

    def test_length_checked_after_trimming(self):
        """Surrounding whitespace does not count toward the limit."""
        assert validate_name("  " + "a" * 100 + "  ") == "a" * 100
        assert validate_message("   short   ") is None

    def test_whitespace_only_rejected(self):
        assert validate_name("   ") is None

    def test_length_checked_before_escaping(self):
        """A 100-char name full of '&' passes even though the escaped form is longer."""
        result = validate_name("&" * 100)
        assert result == "&amp;" * 100

    @pytest.mark.parametrize("value", [None, 42, ["Jane"], {"name": "Jane"}, True])
    def test_non_string_rejected(self, value):
        assert validate_name(value) is None
        assert validate_message(value) is None

    def test_value_is_trimmed_and_escaped(self):
        assert validate_company("  <Acme>  ") == "&lt;Acme&gt;"


class TestValidateEmail:

    def test_valid(self):
        assert validate_email("jane@acme.com") == "jane@acme.com"

    def test_trimmed(self):
        assert validate_email("  jane@acme.com \n") == "jane@acme.com"

    def test_minimum_length(self):
        assert validate_email("a@b.c") == "a@b.c"

    def test_maximum_length(self):
        domain = "@example.com"
        assert validate_email("a" * (255 - len(domain)) + domain) is not None
        assert validate_email("a" * (256 - len(domain)) + domain) is None

    @pytest.mark.parametrize("value", [
        "not-an-email",
        "jane@acme",
        "jane@@acme.com",
        "jane@ac@me.com",
        "jane doe@acme.com",
        "@acme.com",
        "jane@.",
        "a@b.",
    ])
    def test_invalid_format(self, value):
        assert validate_email(value) is None

    def test_slash_is_escaped(self):
        assert validate_email("sales/eu@acme.com") == "sales&#x2F;eu@acme.com"


class TestValidateProducts:

    def test_keeps_recognized(self):
        assert validate_products(["CBB60", "CBB61"]) == ("CBB60", "CBB61")

    def test_drops_unrecognized(self):
        assert validate_products(["CBB60", "UNKNOWN"]) == ("CBB60",)

    def test_only_unrecognized_rejected_like_empty(self):
        assert validate_products(["UNKNOWN"]) is None
        assert validate_products([]) is None

    def test_duplicates_collapsed(self):
        assert validate_products(["CBB61", "CBB60", "CBB61"]) == ("CBB61", "CBB60")

    def test_non_string_entries_dropped(self):
        assert validate_products([{"code": "CBB60"}, 60, "CBB60"]) == ("CBB60",)

    @pytest.mark.parametrize("value", [None, "CBB60", {"CBB60": True}, 1])
    def test_non_list_rejected(self, value):
        assert validate_products(value) is None

    def test_case_sensitive(self):
        assert validate_products(["cbb60"]) is None


class TestValidateInquiry:

    def _raw(self, **overrides):
        data = {
            "name": "Jane Doe",
            "company": "Acme Corp",
            "email": "jane@acme.com",
            "country": "USA",
            "products": ["CBB60"],
            "message": "Please send a quote for 50 units.",
        }
        data.update(overrides)
        return RawInquiry.from_json(data)

    def test_valid_returns_submission(self):
        submission = validate_inquiry(self._raw(name=" <Jane> "))
        assert isinstance(submission, InquirySubmission)
        assert submission.name == "&lt;Jane&gt;"
        assert submission.products == ("CBB60",)
        assert submission.email == "jane@acme.com"

    def test_every_field_is_markup(self):
        submission = validate_inquiry(self._raw())
        for value in (submission.name, submission.company, submission.email,
                      submission.country, submission.message, *submission.products):
            assert isinstance(value, Markup)

    def test_first_failure_wins(self):
        """Name is checked before email, so a bad name is reported."""
        with pytest.raises(InquiryValidationError) as exc_info:
            validate_inquiry(self._raw(name="", email="bad"))
        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("field, value, text", [
        ("name", "", "1-100 characters"),
        ("company", "x" * 201, "1-200 characters"),
        ("email", "not-an-email", "valid email"),
        ("country", "", "valid country"),
        ("products", ["UNKNOWN"], "CBB60 or CBB61"),
        ("message", "hello", "10-5000 characters"),
    ])
    def test_field_messages(self, field, value, text):
        with pytest.raises(InquiryValidationError) as exc_info:
            validate_inquiry(self._raw(**{field: value}))
        assert exc_info.value.field == field
        assert exc_info.value.status_code == 400
        assert text in exc_info.value.public_message

    def test_missing_keys_rejected(self):
        with pytest.raises(InquiryValidationError) as exc_info:
            validate_inquiry(RawInquiry.from_json({}))
        assert exc_info.value.field == "name"

    def test_extra_keys_ignored(self):
        raw = RawInquiry.from_json({**self._raw().__dict__, "admin": True})
        assert validate_inquiry(raw).name == "Jane Doe"

    def test_rules_cover_every_field(self):
        fields = [rule[0] for rule in validation.FIELD_RULES]
        assert fields == ["name", "company", "email", "country", "products", "message"]
