"""
Domain errors raised by the booking services.

Each error carries the HTTP status it maps to; ``main.py`` turns them into
JSON responses so routers only deal with authorization failures.
"""


class BookingError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(BookingError):
    status_code = 404


class InvalidRequestError(BookingError):
    status_code = 400


class ConflictError(BookingError):
    status_code = 409
