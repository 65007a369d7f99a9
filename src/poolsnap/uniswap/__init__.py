from poolsnap.uniswap.deployments import (
    ArbitrumUniswapV3,
    BasePancakeswapV3,
    BaseUniswapV3,
    EthereumMainnetSushiswapV3,
    EthereumMainnetUniswapV3,
    UniswapFactoryDeployment,
    UniswapV3ExchangeDeployment,
)
from poolsnap.uniswap.swap_router_provider import (
    ApprovalType,
    SwapRouterProvider,
    TokenApprovalTypes,
)
from poolsnap.uniswap.v3_functions import generate_v3_pool_address
from poolsnap.uniswap.v3_pool import UniswapV3PoolSnapshot
from poolsnap.uniswap.v3_pool_address import (
    UniswapV3PoolAddressCalculator,
    UniswapV3PoolKey,
    pool_address_cache,
)
from poolsnap.uniswap.v3_pool_provider import UniswapV3PoolAccessor, UniswapV3PoolProvider
from poolsnap.uniswap.v3_types import UniswapV3Slot0

__all__ = (
    "ArbitrumUniswapV3",
    "BasePancakeswapV3",
    "BaseUniswapV3",
    "EthereumMainnetSushiswapV3",
    "EthereumMainnetUniswapV3",
    "ApprovalType",
    "SwapRouterProvider",
    "TokenApprovalTypes",
    "UniswapFactoryDeployment",
    "UniswapV3ExchangeDeployment",
    "UniswapV3PoolAccessor",
    "UniswapV3PoolAddressCalculator",
    "UniswapV3PoolKey",
    "UniswapV3PoolProvider",
    "UniswapV3PoolSnapshot",
    "UniswapV3Slot0",
    "generate_v3_pool_address",
    "pool_address_cache",
)
