from collections.abc import Sequence
from typing import Any

import aiohttp
import eth_abi.abi
from eth_abi.exceptions import DecodingError, EncodingError
from eth_typing import ChecksumAddress
from web3 import AsyncBaseProvider, AsyncWeb3
from web3._utils.threads import Timeout
from web3.exceptions import Web3Exception
from web3.types import BlockIdentifier, TxParams

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.config import settings
from poolsnap.connection import get_async_web3
from poolsnap.exceptions import MulticallTransportError, PoolsnapValueError
from poolsnap.functions import encode_function_calldata
from poolsnap.logging import logger
from poolsnap.types.abstract import AbstractMulticallProvider
from poolsnap.types.multicall import MulticallResult, MulticallResults


def _encode_call(function_prototype: str, function_arguments: Sequence[Any] | None) -> bytes:
    try:
        return encode_function_calldata(
            function_prototype=function_prototype,
            function_arguments=function_arguments,
        )
    except EncodingError as exc:
        raise PoolsnapValueError(
            message=f"Could not encode arguments for {function_prototype}: {exc}"
        ) from exc


class Multicall3Provider(AbstractMulticallProvider):
    """
    Batches read-only calls through the Multicall3 contract, executing each batch with a single
    `eth_call`.

    Calls are submitted with `tryBlockAndAggregate(false, calls)`, so a reverting call does not
    revert the batch. The block number is returned by the contract, which guarantees that every
    result in a batch was read from the same block.

    ref: https://github.com/mds1/multicall3
    """

    AGGREGATE_FUNCTION_PROTOTYPE = "tryBlockAndAggregate(bool,(address,bytes)[])"
    AGGREGATE_RETURN_TYPES = ("uint256", "bytes32", "(bool,bytes)[]")

    def __init__(
        self,
        w3: AsyncWeb3[AsyncBaseProvider] | None = None,
        *,
        multicall_address: str | None = None,
    ) -> None:
        self._w3 = w3
        self.multicall_address = get_checksum_address(
            multicall_address if multicall_address is not None else settings.multicall.address
        )

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(multicall={self.multicall_address})"

    @property
    def w3(self) -> AsyncWeb3[AsyncBaseProvider]:
        return self._w3 if self._w3 is not None else get_async_web3()

    async def _aggregate(
        self,
        calls: list[tuple[ChecksumAddress, bytes]],
        return_types: Sequence[str],
        block_identifier: BlockIdentifier | None,
    ) -> MulticallResults:
        calldata = _encode_call(
            function_prototype=self.AGGREGATE_FUNCTION_PROTOTYPE,
            function_arguments=[False, calls],
        )

        try:
            response = await self.w3.eth.call(
                transaction=TxParams(
                    to=self.multicall_address,
                    data=calldata,
                ),
                block_identifier=block_identifier,
            )
            block_number, _, raw_results = eth_abi.abi.decode(
                types=self.AGGREGATE_RETURN_TYPES,
                data=response,
            )
        except (Web3Exception, Timeout, aiohttp.ClientError, OSError, DecodingError) as exc:
            raise MulticallTransportError(error=str(exc) or exc.__class__.__name__) from exc

        if len(raw_results) != len(calls):
            raise MulticallTransportError(
                error=f"expected {len(calls)} results, received {len(raw_results)}"
            )

        results = [
            self._decode_result(
                success=success,
                return_data=return_data,
                return_types=return_types,
            )
            for success, return_data in raw_results
        ]
        logger.debug(
            f"Multicall with {len(calls)} calls executed at block {block_number}, "
            f"{sum(result.success for result in results)} succeeded"
        )
        return MulticallResults(block_number=block_number, results=results)

    @staticmethod
    def _decode_result(
        success: bool,
        return_data: bytes,
        return_types: Sequence[str],
    ) -> MulticallResult:
        # Calls to addresses without code succeed with empty return data, so treat it as a failure
        if not success or not return_data:
            return MulticallResult(success=False)

        try:
            decoded = eth_abi.abi.decode(types=return_types, data=return_data)
        except DecodingError:
            return MulticallResult(success=False)

        return MulticallResult(success=True, result=tuple(decoded))

    async def call_same_function_on_multiple_contracts(
        self,
        addresses: Sequence[ChecksumAddress],
        function_prototype: str,
        return_types: Sequence[str],
        function_arguments: Sequence[Any] | None = None,
        block_identifier: BlockIdentifier | None = None,
    ) -> MulticallResults:
        calldata = _encode_call(
            function_prototype=function_prototype,
            function_arguments=function_arguments,
        )
        logger.debug(
            f"Calling {function_prototype} on {len(addresses)} contracts "
            f"via {self.multicall_address}"
        )
        return await self._aggregate(
            calls=[(get_checksum_address(address), calldata) for address in addresses],
            return_types=return_types,
            block_identifier=block_identifier,
        )

    async def call_same_function_on_contract_with_multiple_params(
        self,
        address: ChecksumAddress,
        function_prototype: str,
        function_params: Sequence[Sequence[Any]],
        return_types: Sequence[str],
        block_identifier: BlockIdentifier | None = None,
    ) -> MulticallResults:
        address = get_checksum_address(address)
        logger.debug(
            f"Calling {function_prototype} on {address} with {len(function_params)} parameter sets"
        )
        return await self._aggregate(
            calls=[
                (
                    address,
                    _encode_call(
                        function_prototype=function_prototype,
                        function_arguments=params,
                    ),
                )
                for params in function_params
            ],
            return_types=return_types,
            block_identifier=block_identifier,
        )
