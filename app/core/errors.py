"""
Error types raised by the store, the report service and the upload gateway.

Each one is turned into a JSON body by the handlers registered in app.main.
"""

from typing import List, Optional


class PersistenceError(Exception):
    """Report store unreachable, timed out, or a read/write failed."""


class ReportValidationError(ValueError):
    """A create payload is missing required report fields."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class UploadError(Exception):
    """
    The media host could not take the image.

    status_code is 400 when the caller sent no payload, 500 otherwise.
    """

    def __init__(self, message: str, status_code: int = 500, details: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(details or message)
