"""Inquiry notification email: builds the message relayed to the sales inbox.

Only accepts an InquirySubmission, whose fields are already escaped Markup.
The template renders with autoescaping on, so a plain string that somehow
reached it would be escaped rather than interpreted.
"""

from datetime import datetime, timezone

from flask import render_template

from inquiry_relay.services.email_service import OutboundEmail

TEMPLATE = "emails/inquiry_notification.html"


def format_timestamp(moment):
    """ISO 8601 in UTC with milliseconds, e.g. 2026-10-19T08:15:30.123Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_sender(from_email, from_name):
    """resend.dev test senders must be bare addresses; custom domains get a display name."""
    if "resend.dev" in from_email:
        return from_email
    return f"{from_name} <{from_email}>"


def render_inquiry_html(submission, submitted_at):
    return render_template(
        TEMPLATE,
        inquiry=submission,
        message_lines=submission.message.split("\n"),
        submitted_at=format_timestamp(submitted_at),
    )


def build_inquiry_email(submission, settings, submitted_at=None):
    """Build the OutboundEmail for a validated submission.

    Args:
        submission:   InquirySubmission from validate_inquiry().
        settings:     RelaySettings (sender, recipient).
        submitted_at: Submission time; defaults to now (UTC).
    """
    if submitted_at is None:
        submitted_at = datetime.now(timezone.utc)

    return OutboundEmail(
        sender=format_sender(settings.from_email, settings.from_name),
        to=[settings.to_email],
        subject=f"New Inquiry: {submission.name} from {submission.company}",
        html=render_inquiry_html(submission, submitted_at),
        reply_to=submission.email,
    )
