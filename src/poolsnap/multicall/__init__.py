from poolsnap.types.multicall import MulticallResult, MulticallResults

from .multicall3_provider import Multicall3Provider

__all__ = (
    "Multicall3Provider",
    "MulticallResult",
    "MulticallResults",
)
