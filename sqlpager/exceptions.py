"""
Custom exception classes for sqlpager.

Each exception carries an ``http_status`` so that the HTTP error handler
can translate it into a response without a lookup table.
"""


class AppException(Exception):
    """
    Base exception class for all sqlpager exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class ZeroPerPageOperation(AppException, ZeroDivisionError):
    """
    Page arithmetic attempted with a per-page of zero.

    Raised by offset, limit, current page and total pages accessors after
    ``per(0)``. Fetching the records of such a query is still allowed and
    returns nothing.

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class CountSkippedError(AppException):
    """
    Total count requested on a query built with ``without_count()``.

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class SessionRequiredError(AppException):
    """
    A query needed the database but has no session bound or passed in.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500
