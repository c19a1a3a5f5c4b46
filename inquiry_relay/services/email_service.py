"""
Email service: sends transactional email through the Resend HTTP API.

Synchronous: the caller waits for the provider's answer so it can report
success or failure in the same response.

Usage:
    from inquiry_relay.services.email_service import OutboundEmail, send_email

    message_id = send_email(
        OutboundEmail(
            sender="Motor Run Capacitor <noreply@example.com>",
            to=["sales@example.com"],
            subject="Hello",
            html="<p>Hi</p>",
            reply_to="jane@acme.com",
        ),
        api_key="re_...",
    )

Provider errors are logged here in full and surface to callers only as
UpstreamDeliveryError, which carries no provider text.
"""

import logging
from dataclasses import dataclass

import requests

from inquiry_relay.errors import UpstreamDeliveryError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: list
    subject: str
    html: str
    reply_to: str | None = None

    def to_payload(self):
        """Request body in the shape the Resend API expects."""
        payload = {
            "from": self.sender,
            "to": list(self.to),
            "subject": str(self.subject),
            "html": str(self.html),
        }
        if self.reply_to:
            payload["reply_to"] = str(self.reply_to)
        return payload


def send_email(email, api_key, api_url=RESEND_API_URL, timeout=15):
    """
    Send one email and return the provider's message id.

    Args:
        email:    OutboundEmail to deliver.
        api_key:  Resend API key, sent as a bearer token.
        api_url:  Resend emails endpoint.
        timeout:  Socket timeout in seconds for the HTTP call.

    Raises:
        UpstreamDeliveryError: on a non-2xx answer or a network failure.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        resp = requests.post(
            api_url, headers=headers, json=email.to_payload(), timeout=timeout
        )
    except requests.RequestException as e:
        logger.error(f"Resend request to {api_url} failed: {e}")
        raise UpstreamDeliveryError() from e

    logger.info(f"Resend response status: {resp.status_code}")

    if not resp.ok:
        logger.error(
            "Resend API error: status=%s reason=%s headers=%s body=%s",
            resp.status_code,
            resp.reason,
            dict(resp.headers),
            resp.text,
        )
        raise UpstreamDeliveryError(resp.status_code)

    try:
        data = resp.json()
    except ValueError:
        data = {}
    message_id = data.get("id") if isinstance(data, dict) else None
    logger.info(f"Email sent to {', '.join(email.to)} (id={message_id})")
    return message_id
