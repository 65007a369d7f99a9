__all__ = (
    "MAX_INT24",
    "MAX_TICK",
    "MAX_UINT8",
    "MAX_UINT16",
    "MAX_UINT128",
    "MAX_UINT160",
    "MAX_UINT256",
    "MIN_INT24",
    "MIN_TICK",
    "MIN_UINT8",
    "MIN_UINT16",
    "MIN_UINT128",
    "MIN_UINT160",
    "MULTICALL3_ADDRESS",
    "SWAP_ROUTER_02_ADDRESS",
)

import typing

from eth_typing import ChecksumAddress

from poolsnap.checksum_cache import get_checksum_address


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


def _min_int(bits: int) -> int:
    return typing.cast("int", -(2 ** (bits - 1)))


def _max_int(bits: int) -> int:
    return typing.cast("int", (2 ** (bits - 1)) - 1)


MIN_INT24 = _min_int(24)
MAX_INT24 = _max_int(24)

MIN_UINT8 = _min_uint(8)
MAX_UINT8 = _max_uint(8)

MIN_UINT16 = _min_uint(16)
MAX_UINT16 = _max_uint(16)

MIN_UINT128 = _min_uint(128)
MAX_UINT128 = _max_uint(128)

MIN_UINT160 = _min_uint(160)
MAX_UINT160 = _max_uint(160)

MAX_UINT256 = _max_uint(256)

# Uniswap V3 TickMath bounds
MIN_TICK = -887272
MAX_TICK = -MIN_TICK

# Multicall3 is deployed at the same address on all supported chains
# ref: https://github.com/mds1/multicall3
MULTICALL3_ADDRESS: ChecksumAddress = get_checksum_address(
    "0xcA11bde05977b3631167028862bE2a173976CA11"
)

SWAP_ROUTER_02_ADDRESS: ChecksumAddress = get_checksum_address(
    "0x075B36dE1Bd11cb361c5B3B1E80A9ab0e7aa8a60"
)
