import asyncio
import logging
import socket

import pytest

from twillio_mock.client import TwillioMockClient
from twillio_mock.exceptions import TwillioMockConnectionError
from twillio_mock.server import TwillioMockServer

from .helpers import free_port


@pytest.fixture
def live_server():
    server = TwillioMockServer(host="127.0.0.1", port=free_port())
    server.start()
    yield server
    server.stop()


def test_start_serves_requests(live_server: TwillioMockServer):
    client = TwillioMockClient(base_url=f"http://localhost:{live_server.port}")

    async def scenario():
        message = await client.messages.create(to="+1111", from_="+2222", body="over the wire")
        return message, await client.health()

    message, health = asyncio.run(scenario())

    assert live_server.is_running()
    assert health.messages == 1
    assert live_server.get_messages()[0].sid == message.sid


def test_second_start_is_a_noop(live_server: TwillioMockServer, caplog):
    caplog.set_level(logging.WARNING, logger="twillio_mock")

    live_server.start()

    assert "Server is already running" in caplog.text
    assert live_server.is_running()


def test_stop_releases_port():
    port = free_port()
    server = TwillioMockServer(host="127.0.0.1", port=port)
    server.start()
    server.stop()

    assert not server.is_running()
    client = TwillioMockClient(base_url=f"http://127.0.0.1:{port}", timeout=2000)
    with pytest.raises(TwillioMockConnectionError):
        asyncio.run(client.messages.list())

    # the socket is free again
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("127.0.0.1", port))


def test_stop_when_stopped_is_a_noop():
    server = TwillioMockServer(host="127.0.0.1", port=free_port())

    server.stop()

    assert not server.is_running()


def test_context_manager():
    with TwillioMockServer(host="127.0.0.1", port=free_port()) as server:
        assert server.is_running()
    assert not server.is_running()


def test_start_fails_when_port_is_taken():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        port = sock.getsockname()[1]

        server = TwillioMockServer(host="127.0.0.1", port=port)
        with pytest.raises(RuntimeError, match=f"failed to start on port {port}"):
            server.start()

    assert not server.is_running()
