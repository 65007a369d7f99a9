from collections.abc import Sequence
from typing import Any

import eth_abi.abi
from eth_typing import ChecksumAddress
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from poolsnap.checksum_cache import get_checksum_address


def create2_address(
    deployer: str | bytes,
    salt: bytes | str,
    init_code_hash: bytes | str,
) -> ChecksumAddress:
    """
    Generate the deterministic CREATE2 address for a given deployer, salt, and the keccak hash of
    the contract creation (init) bytecode.

    References:
        - https://eips.ethereum.org/EIPS/eip-1014
    """
    return get_checksum_address(
        keccak(HexBytes(0xFF) + HexBytes(deployer) + HexBytes(salt) + HexBytes(init_code_hash))[
            -20:
        ],  # Contract address is the least significant 20 bytes from the 32 byte hash
    )


def extract_argument_types_from_function_prototype(function_prototype: str) -> list[str]:
    """
    Extract the argument types from the function prototype.

    e.g. the argument types for the prototype 'function(address,uint256)' are ['address','uint256']
    """

    if function_args := function_prototype[
        function_prototype.find("(") + 1 : function_prototype.rfind(")")
    ]:
        return _split_top_level(function_args)

    return []


def _split_top_level(types: str) -> list[str]:
    # Tuple arguments like '(address,bytes)[]' contain commas that do not separate arguments
    split_types: list[str] = []
    depth = 0
    start = 0
    for position, character in enumerate(types):
        match character:
            case "(":
                depth += 1
            case ")":
                depth -= 1
            case "," if depth == 0:
                split_types.append(types[start:position])
                start = position + 1
    split_types.append(types[start:])
    return split_types


def function_selector(function_prototype: str) -> bytes:
    """
    Return the 4-byte selector for the function prototype, e.g. 'slot0()' -> 0x3850c7bd
    """
    return keccak(text=function_prototype)[:4]


def encode_function_calldata(
    function_prototype: str, function_arguments: Sequence[Any] | None
) -> bytes:
    """
    Encode the calldata to execute a call to the given function prototype, with ordered arguments.
    The resulting bytes array will include the 4-byte function selector, followed by the
    ABI-encoded arguments.
    """

    if function_arguments is None:
        function_arguments = ()

    return function_selector(function_prototype) + eth_abi.abi.encode(
        types=extract_argument_types_from_function_prototype(function_prototype),
        args=function_arguments,
    )
