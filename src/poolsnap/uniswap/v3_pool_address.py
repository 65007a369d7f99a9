import dataclasses
from collections.abc import Callable, Iterable

from eth_typing import ChecksumAddress

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.config import settings
from poolsnap.erc20 import Erc20Token
from poolsnap.logging import logger
from poolsnap.types.aliases import ChainId, Pip
from poolsnap.types.concrete import ExpiringCache
from poolsnap.uniswap.deployments import EthereumMainnetUniswapV3, UniswapV3ExchangeDeployment
from poolsnap.uniswap.v3_functions import generate_v3_pool_address

type PoolAddressCacheKey = tuple[ChainId, ChecksumAddress, ChecksumAddress, ChecksumAddress, Pip]
type PoolAddressGenerator = Callable[[Iterable[str], Pip, str, str], ChecksumAddress]


# Shared by every calculator in the process. Keys are scoped by chain and deployer.
pool_address_cache: ExpiringCache[PoolAddressCacheKey, ChecksumAddress] = ExpiringCache(
    ttl=settings.cache.pool_address_ttl
)


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PoolKey:
    """
    The canonical identity of a Uniswap V3 pool: its tokens in pool order, fee, and address.
    """

    token0: Erc20Token
    token1: Erc20Token
    fee: Pip
    address: ChecksumAddress


class UniswapV3PoolAddressCalculator:
    """
    Maps unordered token pairs and a fee to the canonical pool key for a single V3 exchange.

    Derived addresses are cached, so repeated requests for the same pool do not repeat the
    keccak hashing.
    """

    def __init__(
        self,
        exchange: UniswapV3ExchangeDeployment | None = None,
        *,
        factory_address: str | None = None,
        deployer_address: str | None = None,
        pool_init_hash: str | None = None,
        chain_id: ChainId | None = None,
        cache: ExpiringCache[PoolAddressCacheKey, ChecksumAddress] | None = None,
        address_generator: PoolAddressGenerator = generate_v3_pool_address,
    ) -> None:
        if exchange is None:
            exchange = EthereumMainnetUniswapV3

        self.chain_id = chain_id if chain_id is not None else exchange.chain_id
        self.factory_address = get_checksum_address(
            factory_address if factory_address is not None else exchange.factory.address
        )
        self.deployer_address = get_checksum_address(
            deployer_address
            if deployer_address is not None
            else (
                # A custom factory without an explicit deployer deploys its own pools
                self.factory_address
                if factory_address is not None
                else exchange.factory.pool_deployer
            )
        )
        self.pool_init_hash = (
            pool_init_hash if pool_init_hash is not None else exchange.factory.pool_init_hash
        )
        self._cache = cache if cache is not None else pool_address_cache
        self._address_generator = address_generator

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"{self.__class__.__name__}(chain_id={self.chain_id}, "
            f"deployer={self.deployer_address})"
        )

    def canonicalize(self, token_a: Erc20Token, token_b: Erc20Token, fee: Pip) -> UniswapV3PoolKey:
        """
        Sort the tokens into pool order and return the pool key, deriving the address on a cache
        miss.

        Raises `PoolsnapValueError` if the tokens are identical or on different chains.
        """

        token0, token1 = (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)

        cache_key: PoolAddressCacheKey = (
            self.chain_id,
            self.deployer_address,
            token0.address,
            token1.address,
            fee,
        )

        address = self._cache.get(cache_key)
        if address is None:
            address = self._address_generator(
                [token0.address, token1.address],
                fee,
                self.deployer_address,
                self.pool_init_hash,
            )
            # Concurrent misses may both derive and insert; the address is identical either way
            self._cache.set(cache_key, address)
            logger.debug(f"Derived pool address {address} for {token0}/{token1}/{fee}")

        return UniswapV3PoolKey(token0=token0, token1=token1, fee=fee, address=address)
