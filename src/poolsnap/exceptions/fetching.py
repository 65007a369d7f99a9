"""
Data fetching exceptions for the poolsnap package.

These are raised when a batched read could not be completed as a whole. Failures of individual
calls inside a completed batch are reported through the result objects instead.
"""

from typing import Any

from poolsnap.exceptions.base import PoolsnapError


class FetchingError(PoolsnapError):
    """
    Base exception for data fetching errors.
    """


class MulticallTransportError(FetchingError):
    """
    Raised when a batched read could not be executed or its aggregate response was unusable, e.g.
    the RPC endpoint was unreachable, timed out, or returned malformed data.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"Multicall failed: {error}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.error,)
