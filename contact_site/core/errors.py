"""
Error kinds raised by the request handlers.

Each error carries the HTTP status it maps to and a short message that is
safe to show to the visitor. API handlers turn them into ``{ok: false}``
JSON bodies; the static handler lets them reach the application exception
handler, which answers with a plain-text body.
"""


class SiteError(Exception):
    """Base class for every error converted into an HTTP response."""

    status_code = 500
    default_message = "500 Internal Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SiteError):
    """A submission is missing required fields or is not valid JSON."""

    status_code = 400
    default_message = "Please fill out all fields."


class ForbiddenError(SiteError):
    """A requested path escapes the public root."""

    status_code = 403
    default_message = "403 Forbidden"


class NotFoundError(SiteError):
    status_code = 404
    default_message = "404 Not Found"


class InternalError(SiteError):
    status_code = 500
    default_message = "500 Internal Server Error"


class PayloadTooLargeError(SiteError):
    """The request body exceeded the configured cap; the connection is closed."""

    status_code = 413
    default_message = "Payload too large."
