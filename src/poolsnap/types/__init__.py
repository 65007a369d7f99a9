from . import abstract, aliases
from .concrete import ExpiringCache
from .multicall import MulticallResult, MulticallResults

__all__ = (
    "ExpiringCache",
    "MulticallResult",
    "MulticallResults",
    "abstract",
    "aliases",
)
