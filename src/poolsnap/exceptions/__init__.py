from poolsnap.exceptions.base import PoolsnapError, PoolsnapValueError
from poolsnap.exceptions.fetching import FetchingError, MulticallTransportError
from poolsnap.exceptions.liquidity_pool import InvalidPoolState, LiquidityPoolError
from poolsnap.exceptions.swap_router import ApprovalTypeQueryFailed, SwapRouterError

from . import fetching, liquidity_pool, swap_router

__all__ = (
    "ApprovalTypeQueryFailed",
    "FetchingError",
    "InvalidPoolState",
    "LiquidityPoolError",
    "MulticallTransportError",
    "PoolsnapError",
    "PoolsnapValueError",
    "SwapRouterError",
    "fetching",
    "liquidity_pool",
    "swap_router",
)
