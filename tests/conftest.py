import pytest
from fastapi.testclient import TestClient

from twillio_mock.server import TwillioMockServer


@pytest.fixture
def server() -> TwillioMockServer:
    return TwillioMockServer(port=3030)


@pytest.fixture
def http(server: TwillioMockServer) -> TestClient:
    return TestClient(server.get_app())
