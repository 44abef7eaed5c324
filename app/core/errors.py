"""
Error kinds raised by services and translated to HTTP responses in app.main
"""

from typing import Optional


class ApplicationError(Exception):
    """Client-fault error carrying an explicit status code and message"""

    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApplicationError):
    status_code = 400


class UnauthorizedError(ApplicationError):
    status_code = 401


class InternalError(ApplicationError):
    """Unclassified failure; the message is always the generic one"""

    status_code = 500
    default_message = "Internal Server error"

    def __init__(self):
        super().__init__(self.default_message)
