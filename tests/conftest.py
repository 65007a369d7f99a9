import logging
from collections.abc import Sequence
from typing import Any

import pytest
from eth_typing import ChecksumAddress
from web3.types import BlockIdentifier

from poolsnap.connection import async_connection_manager
from poolsnap.exceptions import MulticallTransportError
from poolsnap.logging import logger
from poolsnap.types.abstract import AbstractMulticallProvider
from poolsnap.types.multicall import MulticallResult, MulticallResults
from poolsnap.uniswap.v3_pool_address import pool_address_cache


@pytest.fixture(autouse=True)
def _initialize_and_reset_after_each_test():
    """
    Before each test, clear/reset global values and singletons
    """
    async_connection_manager.connections.clear()
    async_connection_manager._default_chain_id = None
    pool_address_cache.clear()


@pytest.fixture(scope="session", autouse=True)
def _set_poolsnap_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


class FakeMulticallProvider(AbstractMulticallProvider):
    """
    An in-memory multicall provider. Results are looked up by function prototype and target
    address (or argument set), and every call is recorded for inspection by the test.
    """

    def __init__(self, block_number: int = 20_000_000) -> None:
        self.block_number = block_number
        self.results: dict[tuple[str, Any], MulticallResult] = {}
        self.calls: list[tuple[str, list[Any], BlockIdentifier | None]] = []
        self.error: Exception | None = None

    def set_result(self, function_prototype: str, key: Any, result: MulticallResult) -> None:
        self.results[(function_prototype, key)] = result

    def _lookup(self, function_prototype: str, key: Any) -> MulticallResult:
        return self.results.get((function_prototype, key), MulticallResult(success=False))

    async def call_same_function_on_multiple_contracts(
        self,
        addresses: Sequence[ChecksumAddress],
        function_prototype: str,
        return_types: Sequence[str],
        function_arguments: Sequence[Any] | None = None,
        block_identifier: BlockIdentifier | None = None,
    ) -> MulticallResults:
        self.calls.append((function_prototype, list(addresses), block_identifier))
        if self.error is not None:
            raise self.error
        return MulticallResults(
            block_number=self.block_number,
            results=[self._lookup(function_prototype, address) for address in addresses],
        )

    async def call_same_function_on_contract_with_multiple_params(
        self,
        address: ChecksumAddress,
        function_prototype: str,
        function_params: Sequence[Sequence[Any]],
        return_types: Sequence[str],
        block_identifier: BlockIdentifier | None = None,
    ) -> MulticallResults:
        self.calls.append((function_prototype, list(function_params), block_identifier))
        if self.error is not None:
            raise self.error
        return MulticallResults(
            block_number=self.block_number,
            results=[self._lookup(function_prototype, tuple(params)) for params in function_params],
        )


@pytest.fixture
def fake_multicall_provider() -> FakeMulticallProvider:
    return FakeMulticallProvider()


@pytest.fixture
def transport_error() -> MulticallTransportError:
    return MulticallTransportError(error="connection refused")
