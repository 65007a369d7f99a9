from collections.abc import Iterable
from fractions import Fraction

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak

from poolsnap.functions import create2_address
from poolsnap.types.aliases import Pip
from poolsnap.uniswap.v3_types import SqrtPriceX96


def exchange_rate_from_sqrt_price_x96(sqrt_price_x96: SqrtPriceX96) -> Fraction:
    # ref: https://blog.uniswap.org/uniswap-v3-math-primer
    return Fraction(sqrt_price_x96**2, 2**192)


def fee_to_percent(fee: Pip) -> Fraction:
    """
    Convert a fee in pips to a percentage, e.g. 3000 -> 3/10 (0.3%)
    """
    return Fraction(fee, 10_000)


def generate_v3_pool_address(
    token_addresses: Iterable[str],
    fee: Pip,
    deployer_address: str,
    init_hash: str,
) -> ChecksumAddress:
    """
    Generate the deterministic pool address from the token addresses and fee.

    The token addresses may be given in any order; they are sorted before hashing, so the result
    depends only on the unordered pair.

    Adapted from https://github.com/Uniswap/v3-periphery/blob/main/contracts/libraries/PoolAddress.sol
    """

    token_addresses = sorted([address.lower() for address in token_addresses])

    return create2_address(
        deployer=deployer_address,
        salt=keccak(
            eth_abi.abi.encode(
                types=("address", "address", "uint24"),
                args=(*token_addresses, fee),
            )
        ),
        init_code_hash=init_hash,
    )
