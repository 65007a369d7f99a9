from fractions import Fraction

import pytest

from poolsnap.constants import MAX_TICK, MAX_UINT160, MIN_TICK
from poolsnap.erc20 import Erc20Token
from poolsnap.exceptions import InvalidPoolState, PoolsnapValueError
from poolsnap.uniswap.v3_pool import UniswapV3PoolSnapshot

WBTC = Erc20Token(
    address="0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599",
    chain_id=1,
    symbol="WBTC",
    decimals=8,
)
WETH = Erc20Token(address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", chain_id=1, symbol="WETH")
USDC = Erc20Token(
    address="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    chain_id=1,
    symbol="USDC",
    decimals=6,
)
WBTC_WETH_POOL_ADDRESS = "0xCBCdF9626bC03E24f779434178A73a0B4bad62eD"


def make_snapshot(**kwargs) -> UniswapV3PoolSnapshot:
    pool_values = {
        "address": WBTC_WETH_POOL_ADDRESS,
        "token0": WBTC,
        "token1": WETH,
        "fee": 3000,
        "sqrt_price_x96": 2**96,
        "liquidity": 1_000_000,
        "tick": 0,
    }
    pool_values.update(kwargs)
    return UniswapV3PoolSnapshot(**pool_values)


def test_snapshot_attributes():
    snapshot = make_snapshot(address=WBTC_WETH_POOL_ADDRESS.lower())
    assert snapshot.address == WBTC_WETH_POOL_ADDRESS
    assert snapshot.name == "WBTC/WETH/0.3%"
    assert str(snapshot) == "WBTC/WETH/0.3%"
    assert make_snapshot(fee=500).name == "WBTC/WETH/0.05%"
    assert make_snapshot(fee=10_000).name == "WBTC/WETH/1%"


def test_snapshot_is_immutable():
    snapshot = make_snapshot()
    with pytest.raises(AttributeError):
        snapshot.liquidity = 0  # type: ignore[misc]


def test_prices():
    snapshot = make_snapshot(sqrt_price_x96=2 * 2**96)
    assert snapshot.token0_price == 4
    assert snapshot.token1_price == Fraction(1, 4)
    assert snapshot.price_of(WBTC) == 4
    assert snapshot.price_of(WETH) == Fraction(1, 4)

    with pytest.raises(PoolsnapValueError):
        snapshot.price_of(USDC)


def test_involves_token():
    snapshot = make_snapshot()
    assert snapshot.involves_token(WBTC)
    assert snapshot.involves_token(WETH)
    assert not snapshot.involves_token(USDC)


def test_invalid_token_order():
    with pytest.raises(InvalidPoolState):
        make_snapshot(token0=WETH, token1=WBTC)


@pytest.mark.parametrize("fee", [-1, 1_000_000])
def test_invalid_fee(fee: int):
    with pytest.raises(InvalidPoolState):
        make_snapshot(fee=fee)


@pytest.mark.parametrize("sqrt_price_x96", [0, MAX_UINT160 + 1])
def test_invalid_sqrt_price(sqrt_price_x96: int):
    with pytest.raises(InvalidPoolState):
        make_snapshot(sqrt_price_x96=sqrt_price_x96)


@pytest.mark.parametrize("tick", [MIN_TICK - 1, MAX_TICK + 1])
def test_invalid_tick(tick: int):
    with pytest.raises(InvalidPoolState):
        make_snapshot(tick=tick)

    make_snapshot(tick=MIN_TICK)
    make_snapshot(tick=MAX_TICK)


def test_invalid_liquidity():
    with pytest.raises(InvalidPoolState):
        make_snapshot(liquidity=-1)
