import dataclasses
from fractions import Fraction

from eth_typing import ChecksumAddress

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.constants import MAX_TICK, MAX_UINT160, MIN_TICK
from poolsnap.erc20 import Erc20Token
from poolsnap.exceptions import InvalidPoolState, PoolsnapValueError
from poolsnap.types.aliases import Pip
from poolsnap.uniswap.v3_functions import exchange_rate_from_sqrt_price_x96, fee_to_percent
from poolsnap.uniswap.v3_types import Liquidity, SqrtPriceX96, Tick

FEE_DENOMINATOR = 1_000_000


@dataclasses.dataclass(slots=True, frozen=True)
class UniswapV3PoolSnapshot:
    """
    The price and active liquidity of a Uniswap V3 pool at a single block.

    Snapshots are immutable and identified by pool address. Construction checks that the values
    could be held by a deployed V3 pool and raises `InvalidPoolState` otherwise.
    """

    address: ChecksumAddress
    token0: Erc20Token
    token1: Erc20Token
    fee: Pip
    sqrt_price_x96: SqrtPriceX96
    liquidity: Liquidity
    tick: Tick

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", get_checksum_address(self.address))

        if not self.token0.sorts_before(self.token1):
            raise InvalidPoolState(
                message=f"Tokens for pool {self.address} are not sorted: {self.token0.address} must sort before {self.token1.address}"  # noqa:E501
            )
        if not 0 <= self.fee < FEE_DENOMINATOR:
            raise InvalidPoolState(message=f"Invalid fee {self.fee} for pool {self.address}")
        if not 0 < self.sqrt_price_x96 <= MAX_UINT160:
            raise InvalidPoolState(
                message=f"Invalid sqrt price {self.sqrt_price_x96} for pool {self.address}"
            )
        if not MIN_TICK <= self.tick <= MAX_TICK:
            raise InvalidPoolState(message=f"Invalid tick {self.tick} for pool {self.address}")
        if self.liquidity < 0:
            raise InvalidPoolState(
                message=f"Invalid liquidity {self.liquidity} for pool {self.address}"
            )

    def __str__(self) -> str:
        return self.name

    @property
    def name(self) -> str:
        return f"{self.token0}/{self.token1}/{float(fee_to_percent(self.fee)):g}%"

    @property
    def token0_price(self) -> Fraction:
        """
        The price of token0 in units of token1, without adjusting for decimals.
        """
        return exchange_rate_from_sqrt_price_x96(self.sqrt_price_x96)

    @property
    def token1_price(self) -> Fraction:
        """
        The price of token1 in units of token0, without adjusting for decimals.
        """
        return 1 / self.token0_price

    def involves_token(self, token: Erc20Token) -> bool:
        return token in (self.token0, self.token1)

    def price_of(self, token: Erc20Token) -> Fraction:
        """
        Return the price of the given token in units of the other token held by the pool.
        """

        if token == self.token0:
            return self.token0_price
        if token == self.token1:
            return self.token1_price

        raise PoolsnapValueError(
            message=f"Token {token.address} is not held by pool {self.address}"
        )
