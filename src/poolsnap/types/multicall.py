import dataclasses
from typing import Any

from poolsnap.types.aliases import BlockNumber


@dataclasses.dataclass(slots=True, frozen=True)
class MulticallResult:
    """
    The outcome of one call inside a batch. `result` holds the decoded return values when
    `success` is True, and None otherwise.
    """

    success: bool
    result: tuple[Any, ...] | None = None


@dataclasses.dataclass(slots=True, frozen=True)
class MulticallResults:
    """
    The outcomes of a batch, in the same order as the calls were submitted, with the block number
    the batch was executed against.
    """

    block_number: BlockNumber
    results: list[MulticallResult]
