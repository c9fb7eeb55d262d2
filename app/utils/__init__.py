from app.utils.errors import (
    AppError,
    InvalidArgument,
    NotFound,
    NoPendingNotification,
    UpstreamUnavailable,
    InternalError,
    status_code_for,
)
from app.utils.logging import configure_logging

__all__ = [
    "AppError", "InvalidArgument", "NotFound", "NoPendingNotification",
    "UpstreamUnavailable", "InternalError", "status_code_for", "configure_logging",
]
