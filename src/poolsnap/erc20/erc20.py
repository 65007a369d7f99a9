import dataclasses

from eth_typing import ChecksumAddress

from poolsnap.checksum_cache import get_checksum_address
from poolsnap.constants import MAX_UINT256
from poolsnap.exceptions import PoolsnapValueError
from poolsnap.types.aliases import ChainId


@dataclasses.dataclass(slots=True, frozen=True)
class Erc20Token:
    """
    An ERC-20 token identity.

    Tokens are identified by their chain and contract address. The symbol, name and decimals are
    descriptive metadata and do not participate in equality, hashing or ordering.
    """

    address: ChecksumAddress
    chain_id: ChainId
    symbol: str = dataclasses.field(default="UNKN", compare=False)
    name: str = dataclasses.field(default="Unknown", compare=False)
    decimals: int = dataclasses.field(default=18, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.decimals <= 255:  # noqa: PLR2004
            raise PoolsnapValueError(
                message=f"Invalid decimals {self.decimals} for token {self.address}"
            )
        # frozen dataclass, so the normalized address must be set through object
        object.__setattr__(self, "address", get_checksum_address(self.address))

    def __lt__(self, other: object) -> bool:
        match other:
            case Erc20Token():
                return self.sorts_before(other)
            case _:
                return NotImplemented

    def __gt__(self, other: object) -> bool:
        match other:
            case Erc20Token():
                return other.sorts_before(self)
            case _:
                return NotImplemented

    def __str__(self) -> str:
        return self.symbol

    def sorts_before(self, other: "Erc20Token") -> bool:
        """
        Return True if this token is token0 of a pool holding both tokens.

        Pools order their tokens by numeric address value, so the comparison is made on the
        lower-cased hex strings. Tokens on different chains, or the same token twice, cannot be
        ordered.
        """

        if self.chain_id != other.chain_id:
            raise PoolsnapValueError(
                message=f"Cannot order tokens on different chains ({self.chain_id} and {other.chain_id})"  # noqa:E501
            )
        if self.address == other.address:
            raise PoolsnapValueError(message=f"Cannot order token {self.address} against itself")

        return self.address.lower() < other.address.lower()


@dataclasses.dataclass(slots=True, frozen=True)
class TokenAmount:
    """
    A raw (undecimalized) quantity of a token.
    """

    token: Erc20Token
    amount: int

    def __post_init__(self) -> None:
        if not 0 <= self.amount <= MAX_UINT256:
            raise PoolsnapValueError(message=f"Invalid token amount {self.amount}")
