from typing import Any

from poolsnap.exceptions.base import PoolsnapError


class SwapRouterError(PoolsnapError):
    """
    Exception raised inside swap router helpers.
    """


class ApprovalTypeQueryFailed(SwapRouterError):
    """
    Raised when the approval type for the input or output token could not be retrieved from the
    router. Partial results are never returned, since guessing an approval policy is unsafe.
    """

    def __init__(self, results: list[Any] | None = None) -> None:
        self.results = results
        super().__init__(
            message="Failed to get approval type from swap router for token in or token out"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.results,)
