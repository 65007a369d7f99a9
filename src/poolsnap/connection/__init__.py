from web3 import AsyncBaseProvider, AsyncWeb3

from poolsnap.config import settings
from poolsnap.types.aliases import ChainId

from .async_connection_manager import AsyncConnectionManager, build_async_web3


def get_async_web3() -> AsyncWeb3[AsyncBaseProvider]:
    return async_connection_manager.get_web3(chain_id=async_connection_manager.default_chain_id)


async def set_async_web3(
    w3: AsyncWeb3[AsyncBaseProvider],
    *,
    optimize: bool = True,
) -> None:
    chain_id = await async_connection_manager.register_web3(w3, optimize=optimize)
    async_connection_manager.set_default_chain(chain_id)


async def connect_async_web3(
    chain_id: ChainId,
    *,
    optimize: bool = True,
) -> AsyncWeb3[AsyncBaseProvider]:
    """
    Connect to the RPC endpoint configured for `chain_id` in the settings, and make it the default.
    """

    w3 = await async_connection_manager.register_from_settings(
        chain_id,
        settings.rpc,
        optimize=optimize,
    )
    async_connection_manager.set_default_chain(chain_id)
    return w3


async_connection_manager = AsyncConnectionManager()


__all__ = (
    "AsyncConnectionManager",
    "async_connection_manager",
    "build_async_web3",
    "connect_async_web3",
    "get_async_web3",
    "set_async_web3",
)
