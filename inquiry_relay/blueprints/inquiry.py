"""Inquiry blueprint: /api/submit-inquiry

Public endpoint for the landing page contact form. Validates the submission
and relays it to the sales inbox through the Resend API.

Route Map:
  POST    /api/submit-inquiry  - Validate the inquiry and send it by email
  OPTIONS /api/submit-inquiry  - CORS preflight (headers added by middleware)

Any other method gets a JSON 405 from the app-level error handler.
"""

import logging

from flask import Blueprint, jsonify, request

from inquiry_relay.config import current_settings
from inquiry_relay.errors import (
    ConfigurationError,
    InquiryRelayError,
    InquiryValidationError,
)
from inquiry_relay.models.inquiry import RawInquiry
from inquiry_relay.services.email_service import send_email
from inquiry_relay.services.inquiry_email import build_inquiry_email
from inquiry_relay.services.validation import validate_inquiry

inquiry_bp = Blueprint("inquiry", __name__, url_prefix="/api")

logger = logging.getLogger(__name__)


def _error(message, status):
    return jsonify(success=False, error=message), status


@inquiry_bp.route("/submit-inquiry", methods=["POST", "OPTIONS"])
def submit_inquiry():
    """
    Accept a JSON inquiry and relay it via email.

    Expects: { name, company, email, country, products: [...], message }
    Returns: { success: true, message } or { success: false, error }
    """
    if request.method == "OPTIONS":
        return "", 200

    settings = current_settings()

    try:
        # --- Configuration gate ---
        missing = settings.missing()
        if missing:
            logger.error(
                f"Cannot relay inquiry, environment variables not set: {', '.join(missing)}"
            )
            raise ConfigurationError(missing)

        logger.info("Received inquiry submission")

        # Bodies posted as text/plain are still parsed as JSON
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            return _error("Invalid request.", 400)

        # --- Validation (first failing field wins) ---
        submission = validate_inquiry(RawInquiry.from_json(data))
        logger.info("Fields validated, preparing email")

        # --- Build + send ---
        email = build_inquiry_email(submission, settings)
        logger.info(f"Sending inquiry email via Resend to {settings.to_email}")
        message_id = send_email(
            email,
            api_key=settings.api_key,
            api_url=settings.api_url,
            timeout=settings.timeout,
        )

    except InquiryValidationError as e:
        logger.info(f"Inquiry rejected: invalid {e.field}")
        return _error(e.public_message, e.status_code)
    except InquiryRelayError as e:
        logger.warning(f"Inquiry not relayed: {type(e).__name__}")
        return _error(e.public_message, e.status_code)
    except Exception:
        logger.exception("Error processing inquiry")
        return _error(InquiryRelayError.public_message, 500)

    logger.info(f"Inquiry from {submission.email} relayed (id={message_id})")
    return jsonify(success=True, message="Inquiry submitted successfully"), 200
