import json
import logging
import os
import sys

import click
from flask import Flask, jsonify

from inquiry_relay.config import RelaySettings, config_by_name
from inquiry_relay.errors import InquiryRelayError


def create_app(config_name=None, settings=None):
    """Application factory.

    Args:
        config_name: Key of config_by_name; defaults to $FLASK_ENV.
        settings:    RelaySettings to use instead of the ones derived from
                     the config class (tests inject fixtures this way).
    """

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Process-wide settings, read-only from here on ---
    if settings is None:
        settings = RelaySettings.from_mapping(app.config)
    app.extensions["inquiry_relay"] = settings

    # --- CORS middleware ---
    from inquiry_relay.middleware.cors import init_cors_middleware
    init_cors_middleware(app)

    # --- Register blueprints ---
    from inquiry_relay.blueprints.inquiry import inquiry_bp

    app.register_blueprint(inquiry_bp)

    # --- Error handlers (JSON, same shape as the API) ---
    @app.errorhandler(404)
    def not_found(e):
        return jsonify(success=False, error="Not found"), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify(success=False, error="Method not allowed"), 405

    @app.errorhandler(500)
    def server_error(e):
        return jsonify(success=False, error=InquiryRelayError.public_message), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


SAMPLE_INQUIRY = {
    "name": "Jane Doe",
    "company": "Acme Corp",
    "email": "jane@acme.com",
    "country": "USA",
    "products": ["CBB60"],
    "message": "Please send a quote for 50 units.",
}


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("check-config")
    def check_config():
        """Report which relay settings are configured. Secrets are never printed.

        Exits with status 1 when a required setting is missing.
        """
        settings = app.extensions["inquiry_relay"]
        missing = settings.missing()

        for name in settings.REQUIRED_NAMES:
            state = "MISSING" if name in missing else "set"
            click.echo(f"  {name}: {state}")
        click.echo(f"  FROM_EMAIL: {settings.from_email}")
        click.echo(f"  RESEND_API_URL: {settings.api_url}")
        if settings.allowed_origins:
            click.echo(f"  ALLOWED_ORIGINS: {', '.join(settings.allowed_origins)}")
        else:
            click.echo("  ALLOWED_ORIGINS: (not set, any origin allowed)")

        if missing:
            click.echo(f"ERROR: missing {', '.join(missing)}")
            sys.exit(1)
        click.echo("Configuration OK.")

    @app.cli.command("send-test-inquiry")
    @click.option("--dry-run", is_flag=True, help="Print the email payload instead of sending it.")
    def send_test_inquiry(dry_run):
        """Validate a sample inquiry and relay it to TO_EMAIL.

        Usage:
            flask send-test-inquiry
            flask send-test-inquiry --dry-run
        """
        from inquiry_relay.errors import UpstreamDeliveryError
        from inquiry_relay.models.inquiry import RawInquiry
        from inquiry_relay.services.email_service import send_email
        from inquiry_relay.services.inquiry_email import build_inquiry_email
        from inquiry_relay.services.validation import validate_inquiry

        settings = app.extensions["inquiry_relay"]
        submission = validate_inquiry(RawInquiry.from_json(SAMPLE_INQUIRY))
        email = build_inquiry_email(submission, settings)

        if dry_run:
            click.echo(json.dumps(email.to_payload(), indent=2))
            return

        missing = settings.missing()
        if missing:
            click.echo(f"ERROR: missing {', '.join(missing)}")
            sys.exit(1)

        try:
            message_id = send_email(
                email,
                api_key=settings.api_key,
                api_url=settings.api_url,
                timeout=settings.timeout,
            )
        except UpstreamDeliveryError:
            click.echo("ERROR: Resend rejected the test email; see the log for details.")
            sys.exit(1)
        click.echo(f"Test inquiry sent (id={message_id})")
