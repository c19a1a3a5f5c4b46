import os
from dataclasses import dataclass

from flask import current_app

DEFAULT_TIMEOUT = 15.0


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    RESEND_API_KEY = os.environ.get("RESEND_API_KEY")
    TO_EMAIL = os.environ.get("TO_EMAIL")

    # --- Sender ---
    FROM_EMAIL = os.environ.get("FROM_EMAIL", "noreply@eperscapacitor.com")
    FROM_NAME = os.environ.get("FROM_NAME", "Motor Run Capacitor")

    # --- Resend API ---
    RESEND_API_URL = os.environ.get("RESEND_API_URL", "https://api.resend.com/emails")
    RESEND_TIMEOUT = os.environ.get("RESEND_TIMEOUT", "15")  # seconds, parsed by RelaySettings

    # --- CORS ---
    # Comma-separated, e.g. "https://eperscapacitor.com,https://eperscapacitor-*".
    # Empty means any origin is allowed.
    ALLOWED_ORIGINS = os.environ.get("ALLOWED_ORIGINS", "")

    REQUIRED = ("RESEND_API_KEY", "TO_EMAIL")

    @classmethod
    def validate(cls):
        """Fail fast if required env vars are missing."""
        missing = [v for v in cls.REQUIRED if not getattr(cls, v, None)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        if parse_timeout(cls.RESEND_TIMEOUT) is None:
            raise RuntimeError(
                f"RESEND_TIMEOUT must be a positive number of seconds, got {cls.RESEND_TIMEOUT!r}"
            )


class DevConfig(Config):
    """Local development."""

    DEBUG = True


class TestConfig(Config):
    """Testing: fake credentials, no real network calls."""

    TESTING = True
    DEBUG = True
    RESEND_API_KEY = "re_test_fake"
    TO_EMAIL = "sales@example.com"
    FROM_EMAIL = "noreply@example.com"
    FROM_NAME = "Motor Run Capacitor"
    RESEND_API_URL = "https://api.resend.test/emails"
    RESEND_TIMEOUT = 5.0
    ALLOWED_ORIGINS = ""


class ProdConfig(Config):
    """Production."""

    DEBUG = False


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}


@dataclass(frozen=True)
class RelaySettings:
    """Process-wide settings, built once in create_app() and read-only after."""

    REQUIRED_NAMES = ("RESEND_API_KEY", "TO_EMAIL")

    api_key: str | None
    to_email: str | None
    from_email: str
    from_name: str
    allowed_origins: tuple[str, ...] = ()
    api_url: str = "https://api.resend.com/emails"
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_mapping(cls, config):
        """Build settings from a Flask config (or any mapping of the same keys)."""
        return cls(
            api_key=config.get("RESEND_API_KEY") or None,
            to_email=config.get("TO_EMAIL") or None,
            from_email=config.get("FROM_EMAIL") or "noreply@eperscapacitor.com",
            from_name=config.get("FROM_NAME") or "Motor Run Capacitor",
            allowed_origins=parse_allowed_origins(config.get("ALLOWED_ORIGINS")),
            api_url=config.get("RESEND_API_URL") or "https://api.resend.com/emails",
            timeout=parse_timeout(config.get("RESEND_TIMEOUT")) or DEFAULT_TIMEOUT,
        )

    def missing(self):
        """Names of required settings that are not configured."""
        values = {"RESEND_API_KEY": self.api_key, "TO_EMAIL": self.to_email}
        return [name for name in self.REQUIRED_NAMES if not values[name]]


def parse_timeout(raw):
    """Seconds as a positive float, or None when unset or not a number."""
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


def parse_allowed_origins(raw):
    """Split a comma-separated origin list, dropping blanks."""
    if not raw:
        return ()
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def current_settings():
    """RelaySettings of the running app (set up by create_app)."""
    return current_app.extensions["inquiry_relay"]
