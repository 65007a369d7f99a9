import importlib
from pathlib import Path

import pytest
import tenacity
from pydantic import HttpUrl, WebsocketUrl
from web3 import AsyncHTTPProvider, AsyncIPCProvider, WebSocketProvider
from web3.providers.persistent import PersistentConnectionProvider

from poolsnap.connection import (
    async_connection_manager,
    build_async_web3,
    connect_async_web3,
    get_async_web3,
    set_async_web3,
)
from poolsnap.exceptions import PoolsnapValueError


class FakeMiddlewareOnion:
    def __init__(self) -> None:
        self.middleware = ["a", "b"]

    def clear(self) -> None:
        self.middleware = []


class FakeProvider:
    decode_rpc_response = None


class FakeEth:
    def __init__(self, chain_id: int) -> None:
        self._chain_id = chain_id

    @property
    async def chain_id(self) -> int:
        return self._chain_id


class FakeAsyncWeb3:
    def __init__(self, chain_id: int = 1, *, connected: bool = True) -> None:
        self.eth = FakeEth(chain_id)
        self.provider = FakeProvider()
        self.middleware_onion = FakeMiddlewareOnion()
        self.connected = connected

    async def is_connected(self) -> bool:
        return self.connected


def test_no_default_web3():
    with pytest.raises(PoolsnapValueError, match="A default chain ID has not been provided."):
        get_async_web3()

    with pytest.raises(PoolsnapValueError, match="does not have a registered Web3 instance"):
        async_connection_manager.get_web3(69)


async def test_set_async_web3():
    w3 = FakeAsyncWeb3(chain_id=8453)
    await set_async_web3(w3)  # type: ignore[arg-type]

    assert async_connection_manager.default_chain_id == 8453
    assert get_async_web3() is w3
    assert async_connection_manager.get_web3(8453) is w3
    assert w3.middleware_onion.middleware == []
    assert w3.provider.decode_rpc_response is not None


async def test_unoptimized_web3():
    w3 = FakeAsyncWeb3()
    await async_connection_manager.register_web3(w3, optimize=False)  # type: ignore[arg-type]
    assert w3.middleware_onion.middleware == ["a", "b"]
    assert w3.provider.decode_rpc_response is None


async def test_disconnected_web3(monkeypatch: pytest.MonkeyPatch):
    # Give up after the second check instead of retrying for 10 seconds
    monkeypatch.setattr(tenacity, "stop_after_delay", lambda _: tenacity.stop_after_attempt(2))
    monkeypatch.setattr(tenacity, "wait_exponential_jitter", tenacity.wait_none)
    w3 = FakeAsyncWeb3(connected=False)
    with pytest.raises(PoolsnapValueError, match="Web3 instance is not connected."):
        await async_connection_manager.register_web3(w3)  # type: ignore[arg-type]
    assert async_connection_manager.connections == {}


async def test_build_async_web3(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    async def fake_connect(self) -> None:
        return None

    monkeypatch.setattr(PersistentConnectionProvider, "connect", fake_connect)

    w3 = await build_async_web3(HttpUrl("http://localhost:8545"))
    assert isinstance(w3.provider, AsyncHTTPProvider)

    w3 = await build_async_web3(WebsocketUrl("ws://localhost:8546"))
    assert isinstance(w3.provider, WebSocketProvider)

    w3 = await build_async_web3(tmp_path / "node.ipc")
    assert isinstance(w3.provider, AsyncIPCProvider)


async def test_connect_without_configured_endpoint():
    with pytest.raises(PoolsnapValueError, match="No RPC endpoint is configured"):
        await connect_async_web3(69)


async def test_connect_with_mismatched_chain(monkeypatch: pytest.MonkeyPatch):
    async def fake_build_async_web3(endpoint):
        return FakeAsyncWeb3(chain_id=8453)

    monkeypatch.setattr(
        importlib.import_module("poolsnap.connection.async_connection_manager"),
        "build_async_web3",
        fake_build_async_web3,
    )
    with pytest.raises(PoolsnapValueError, match="is connected to chain ID 8453"):
        await async_connection_manager.register_from_settings(
            1, {1: HttpUrl("http://localhost:8545")}
        )
    assert async_connection_manager.connections == {}
