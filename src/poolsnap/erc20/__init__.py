from .erc20 import Erc20Token, TokenAmount

__all__ = (
    "Erc20Token",
    "TokenAmount",
)
