from .multicall_provider import AbstractMulticallProvider

__all__ = ("AbstractMulticallProvider",)
