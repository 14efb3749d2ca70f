"""Common utility functions."""

from .responses import service_error_response

__all__ = [
    "service_error_response",
]
