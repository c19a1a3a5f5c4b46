"""CORS middleware: origin negotiation for the landing page form.

Runs after every request, error responses included, so CORS headers never
depend on whether the submission itself succeeded.

Allow-list entries (ALLOWED_ORIGINS) are exact origins or prefixes ending in
"*". An empty allow-list allows every origin; that default is kept for
deployments that predate ALLOWED_ORIGINS.
"""

from flask import request

from inquiry_relay.config import current_settings

ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = (
    "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
    "Content-MD5, Content-Type, Date, X-Api-Version"
)


def is_origin_allowed(origin, allowed_origins):
    """Return True if ``origin`` matches an allow-list entry."""
    if not allowed_origins:
        return True
    for allowed in allowed_origins:
        if allowed == "*":
            return True
        if allowed.endswith("*"):
            if origin.startswith(allowed[:-1]):
                return True
        elif origin == allowed:
            return True
    return False


def apply_cors_headers(response, origin, allowed_origins):
    """Set the CORS headers on ``response`` for the given request origin."""
    if origin and is_origin_allowed(origin, allowed_origins):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.vary.add("Origin")
    elif not allowed_origins:
        response.headers["Access-Control-Allow-Origin"] = "*"

    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
    return response


def add_cors_headers(response):
    """After-request hook."""
    settings = current_settings()
    return apply_cors_headers(
        response, request.headers.get("Origin"), settings.allowed_origins
    )


def init_cors_middleware(app):
    """Register the CORS headers as an after_request hook."""
    app.after_request(add_cors_headers)
