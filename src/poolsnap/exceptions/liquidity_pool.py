from poolsnap.exceptions.base import PoolsnapError


class LiquidityPoolError(PoolsnapError):
    """
    Exception raised inside liquidity pool helpers.
    """


class InvalidPoolState(LiquidityPoolError):
    """
    Raised when a pool snapshot is built from values that a Uniswap V3 pool cannot hold.
    """
