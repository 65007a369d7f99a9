from .checksum_cache import get_checksum_address
from .config import settings
from .connection import (
    async_connection_manager,
    connect_async_web3,
    get_async_web3,
    set_async_web3,
)
from .version import __version__

# isort: split

from .erc20 import Erc20Token, TokenAmount
from .logging import logger
from .multicall import Multicall3Provider
from .types import ExpiringCache
from .uniswap import (
    ApprovalType,
    SwapRouterProvider,
    TokenApprovalTypes,
    UniswapV3PoolAccessor,
    UniswapV3PoolAddressCalculator,
    UniswapV3PoolKey,
    UniswapV3PoolProvider,
    UniswapV3PoolSnapshot,
)

__all__ = (
    "ApprovalType",
    "Erc20Token",
    "ExpiringCache",
    "Multicall3Provider",
    "SwapRouterProvider",
    "TokenAmount",
    "TokenApprovalTypes",
    "UniswapV3PoolAccessor",
    "UniswapV3PoolAddressCalculator",
    "UniswapV3PoolKey",
    "UniswapV3PoolProvider",
    "UniswapV3PoolSnapshot",
    "__version__",
    "async_connection_manager",
    "connect_async_web3",
    "get_async_web3",
    "get_checksum_address",
    "logger",
    "set_async_web3",
    "settings",
)
