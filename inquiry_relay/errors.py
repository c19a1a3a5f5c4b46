"""Error taxonomy for the inquiry relay.

Every error carries a client-safe message. Detail meant only for the server
log (missing variable names, provider responses) is logged where the error is
raised and never copied into the message.
"""


class InquiryRelayError(Exception):
    """Base class. ``status_code`` and ``public_message`` shape the HTTP response."""

    status_code = 500
    public_message = "An error occurred while processing your request. Please try again later."

    def __init__(self, message=None):
        super().__init__(message or self.public_message)
        if message is not None:
            self.public_message = message


class ConfigurationError(InquiryRelayError):
    """Required outbound-mail configuration is missing."""

    public_message = "Server configuration error"

    def __init__(self, missing=()):
        super().__init__()
        self.missing = tuple(missing)


class InquiryValidationError(InquiryRelayError):
    """A submitted field failed its constraint."""

    status_code = 400

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class UpstreamDeliveryError(InquiryRelayError):
    """The mail provider rejected the message or could not be reached."""

    public_message = "Failed to send your inquiry. Please try again later."

    def __init__(self, status_code=None):
        super().__init__()
        self.upstream_status = status_code
