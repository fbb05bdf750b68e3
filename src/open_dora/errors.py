"""Exceptions raised by the open-dora service."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import Response


class OpenDoraError(Exception):
    """Base class for all open-dora errors."""


class QueryExecutionError(OpenDoraError):
    """
    A query against the metrics database failed.

    The message is the underlying driver message, unchanged. Services that
    propagate the error attach the empty response they would have returned
    as ``response``.
    """

    def __init__(self, message: str, response: Optional["Response"] = None):
        super().__init__(message)
        self.message = message
        self.response = response


class InvalidParameterError(OpenDoraError, ValueError):
    """Request parameters could not be decoded or are not served."""
