import functools

from cchecksum import to_checksum_address
from eth_typing import ChecksumAddress, HexAddress


@functools.lru_cache(maxsize=4096)
def get_checksum_address(address: HexAddress | str | bytes) -> ChecksumAddress:
    """
    Return the EIP-55 checksummed form of `address`. Results are memoized since the same token and
    pool addresses are checksummed repeatedly while resolving pools.
    """
    return to_checksum_address(address)
