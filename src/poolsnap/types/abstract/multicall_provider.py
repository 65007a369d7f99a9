from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from eth_typing import ChecksumAddress
from web3.types import BlockIdentifier

from poolsnap.types.multicall import MulticallResults


class AbstractMulticallProvider(ABC):
    """
    Base class for providers that batch read-only contract calls into a single remote round trip.

    Implementations must return one result per call, in submission order, and must report
    failures of individual calls by setting `success=False` on that result. Exceptions are
    reserved for failures of the batch as a whole, which are raised as `MulticallTransportError`.
    """

    @abstractmethod
    async def call_same_function_on_multiple_contracts(
        self,
        addresses: Sequence[ChecksumAddress],
        function_prototype: str,
        return_types: Sequence[str],
        function_arguments: Sequence[Any] | None = None,
        block_identifier: BlockIdentifier | None = None,
    ) -> MulticallResults:
        """
        Call `function_prototype` with the same arguments on every contract in `addresses`.
        """

    @abstractmethod
    async def call_same_function_on_contract_with_multiple_params(
        self,
        address: ChecksumAddress,
        function_prototype: str,
        function_params: Sequence[Sequence[Any]],
        return_types: Sequence[str],
        block_identifier: BlockIdentifier | None = None,
    ) -> MulticallResults:
        """
        Call `function_prototype` on the contract at `address` once for each argument set in
        `function_params`.
        """
