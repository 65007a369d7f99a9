import asyncio
from collections.abc import Iterable, Iterator

from eth_typing import ChecksumAddress
from pydantic import ValidationError
from web3.types import BlockIdentifier

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.erc20 import Erc20Token
from poolsnap.exceptions import InvalidPoolState, MulticallTransportError
from poolsnap.logging import logger
from poolsnap.types.abstract import AbstractMulticallProvider
from poolsnap.types.aliases import BlockNumber, Pip
from poolsnap.types.multicall import MulticallResult, MulticallResults
from poolsnap.uniswap.v3_pool import UniswapV3PoolSnapshot
from poolsnap.uniswap.v3_pool_address import UniswapV3PoolAddressCalculator, UniswapV3PoolKey
from poolsnap.uniswap.v3_types import (
    LIQUIDITY_FUNCTION_PROTOTYPE,
    LIQUIDITY_RETURN_TYPES,
    SLOT0_FUNCTION_PROTOTYPE,
    SLOT0_RETURN_TYPES,
    UniswapV3Liquidity,
    UniswapV3Slot0,
)

type TokenPairRequest = tuple[Erc20Token, Erc20Token, Pip]


class UniswapV3PoolAccessor:
    """
    A read-only view of the pools resolved by a single `get_pools` call.

    Pools can be looked up by token pair and fee in either token order, or by address. Requested
    pools that were missing or uninitialized at the time of the read are absent.
    """

    def __init__(
        self,
        pools: dict[ChecksumAddress, UniswapV3PoolSnapshot],
        address_calculator: UniswapV3PoolAddressCalculator,
        block_number: BlockNumber | None = None,
    ) -> None:
        self._pools = pools
        self._address_calculator = address_calculator
        self._block_number = block_number

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(pools={len(self._pools)}, block={self._block_number})"

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[UniswapV3PoolSnapshot]:
        return iter(self._pools.values())

    @property
    def block_number(self) -> BlockNumber | None:
        """
        The block the pool states were read at, or None if no reads were made.
        """
        return self._block_number

    def get_pool(
        self,
        token_a: Erc20Token,
        token_b: Erc20Token,
        fee: Pip,
    ) -> UniswapV3PoolSnapshot | None:
        pool_key = self._address_calculator.canonicalize(token_a, token_b, fee)
        return self._pools.get(pool_key.address)

    def get_pool_by_address(self, address: str) -> UniswapV3PoolSnapshot | None:
        return self._pools.get(get_checksum_address(address))

    def get_all_pools(self) -> list[UniswapV3PoolSnapshot]:
        return list(self._pools.values())


class UniswapV3PoolProvider:
    """
    Resolves token pairs into snapshots of their Uniswap V3 pools.

    Every call to `get_pools` reads the price and liquidity of all requested pools with two
    batched calls, issued concurrently against the same block.
    """

    def __init__(
        self,
        multicall_provider: AbstractMulticallProvider,
        address_calculator: UniswapV3PoolAddressCalculator | None = None,
    ) -> None:
        self.multicall_provider = multicall_provider
        self.address_calculator = (
            address_calculator
            if address_calculator is not None
            else UniswapV3PoolAddressCalculator()
        )

    def _canonicalize_pairs(
        self,
        token_pairs: Iterable[TokenPairRequest],
    ) -> list[UniswapV3PoolKey]:
        seen_addresses: set[ChecksumAddress] = set()
        pool_keys: list[UniswapV3PoolKey] = []

        requested = 0
        for token_a, token_b, fee in token_pairs:
            requested += 1
            pool_key = self.address_calculator.canonicalize(token_a, token_b, fee)
            if pool_key.address in seen_addresses:
                continue
            seen_addresses.add(pool_key.address)
            pool_keys.append(pool_key)

        logger.debug(f"Resolving {len(pool_keys)} unique pools from {requested} requested pairs")
        return pool_keys

    @staticmethod
    def _check_result_count(results: MulticallResults, expected: int, function: str) -> None:
        if len(results.results) != expected:
            raise MulticallTransportError(
                error=f"{function} returned {len(results.results)} results for {expected} pools"
            )

    @staticmethod
    def _build_snapshot(
        pool_key: UniswapV3PoolKey,
        slot0_result: MulticallResult,
        liquidity_result: MulticallResult,
    ) -> UniswapV3PoolSnapshot | None:
        if not (slot0_result.success and liquidity_result.success):
            return None
        assert slot0_result.result is not None
        assert liquidity_result.result is not None

        slot0 = UniswapV3Slot0.from_call_result(slot0_result.result)  # type: ignore[arg-type]
        if slot0.sqrt_price_x96 == 0:
            return None
        (liquidity,) = liquidity_result.result

        return UniswapV3PoolSnapshot(
            address=pool_key.address,
            token0=pool_key.token0,
            token1=pool_key.token1,
            fee=pool_key.fee,
            sqrt_price_x96=slot0.sqrt_price_x96,
            liquidity=UniswapV3Liquidity(liquidity=liquidity).liquidity,
            tick=slot0.tick,
        )

    async def get_pools(
        self,
        token_pairs: Iterable[TokenPairRequest],
        *,
        block_identifier: BlockIdentifier | None = None,
    ) -> UniswapV3PoolAccessor:
        """
        Fetch snapshots for the pools holding each (token_a, token_b, fee) request.

        Requests that resolve to the same pool are fetched once. Pools that do not exist, failed
        to return either value, or have not been initialized are left out of the result.

        Raises `MulticallTransportError` if either batched read could not be completed.
        """

        pool_keys = self._canonicalize_pairs(token_pairs)
        if not pool_keys:
            return UniswapV3PoolAccessor(pools={}, address_calculator=self.address_calculator)

        pool_addresses = [pool_key.address for pool_key in pool_keys]
        slot0_task = asyncio.create_task(
            self.multicall_provider.call_same_function_on_multiple_contracts(
                addresses=pool_addresses,
                function_prototype=SLOT0_FUNCTION_PROTOTYPE,
                return_types=SLOT0_RETURN_TYPES,
                block_identifier=block_identifier,
            )
        )
        liquidity_task = asyncio.create_task(
            self.multicall_provider.call_same_function_on_multiple_contracts(
                addresses=pool_addresses,
                function_prototype=LIQUIDITY_FUNCTION_PROTOTYPE,
                return_types=LIQUIDITY_RETURN_TYPES,
                block_identifier=block_identifier,
            )
        )
        try:
            slot0_results, liquidity_results = await asyncio.gather(slot0_task, liquidity_task)
        finally:
            # A failed read must not leave the other one running
            slot0_task.cancel()
            liquidity_task.cancel()
        self._check_result_count(slot0_results, len(pool_keys), SLOT0_FUNCTION_PROTOTYPE)
        self._check_result_count(liquidity_results, len(pool_keys), LIQUIDITY_FUNCTION_PROTOTYPE)

        if slot0_results.block_number != liquidity_results.block_number:
            logger.debug(
                f"slot0 read at block {slot0_results.block_number}, liquidity read at block "
                f"{liquidity_results.block_number}"
            )

        pools: dict[ChecksumAddress, UniswapV3PoolSnapshot] = {}
        for index, (pool_key, slot0_result, liquidity_result) in enumerate(
            zip(pool_keys, slot0_results.results, liquidity_results.results, strict=True)
        ):
            try:
                snapshot = self._build_snapshot(pool_key, slot0_result, liquidity_result)
            except (ValidationError, InvalidPoolState) as exc:
                logger.info(
                    f"Skipping pool {pool_key.address} at index {index} with invalid state: {exc}"
                )
                continue
            if snapshot is None:
                logger.info(
                    f"Skipping invalid pool {pool_key.token0}/{pool_key.token1}/{pool_key.fee} "
                    f"at index {index} ({pool_key.address})"
                )
                continue
            pools[snapshot.address] = snapshot

        logger.debug(
            f"Resolved {len(pools)} of {len(pool_keys)} pools at block {slot0_results.block_number}"
        )
        return UniswapV3PoolAccessor(
            pools=pools,
            address_calculator=self.address_calculator,
            block_number=slot0_results.block_number,
        )
