"""Error kinds raised by the services and their HTTP status mapping."""


class AppError(Exception):
    """Base exception for errors reported to API clients"""

    default_message = "An internal server error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(AppError):
    """Missing or malformed request input"""
    default_message = "Invalid argument"


class NotFound(AppError):
    """No matching local record"""
    default_message = "Not found"


class NoPendingNotification(NotFound):
    """No completed transaction waiting to be read"""
    default_message = "No transaction found"


class UpstreamUnavailable(AppError):
    """Payment provider answered with a missing or malformed payload"""
    default_message = "Failed to fetch transaction data from Midtrans"


class InternalError(AppError):
    """Unexpected failure, including provider network errors"""
    pass


# Most specific kind first. NoPendingNotification keeps the 400 the storefront
# already relies on instead of the 404 used by every other not-found case.
ERROR_STATUS_CODES: list[tuple[type[AppError], int]] = [
    (InvalidArgument, 400),
    (NoPendingNotification, 400),
    (NotFound, 404),
    (UpstreamUnavailable, 500),
    (InternalError, 500),
]


def status_code_for(error: AppError) -> int:
    for kind, status_code in ERROR_STATUS_CODES:
        if isinstance(error, kind):
            return status_code
    return 500
