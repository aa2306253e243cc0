"""
Twillio Mock Server

A local mock server that mimics the provider's SMS API for development and
testing, plus an async client for it.
"""

from .client import MessagesAPI, TwillioMockClient, create_twillio_mock_client
from .exceptions import (
    TwillioMockClientError,
    TwillioMockConfigError,
    TwillioMockConnectionError,
    TwillioMockResponseError,
    TwillioMockTimeoutError,
)
from .models import (
    APIResponse,
    ClearMessagesResponse,
    CreateMessageRequest,
    ErrorResponse,
    HealthResponse,
    Message,
)
from .server import TwillioMockServer, create_twillio_mock_server

__version__ = "1.0.0"

__all__ = [
    "APIResponse",
    "ClearMessagesResponse",
    "CreateMessageRequest",
    "ErrorResponse",
    "HealthResponse",
    "Message",
    "MessagesAPI",
    "TwillioMockClient",
    "TwillioMockClientError",
    "TwillioMockConfigError",
    "TwillioMockConnectionError",
    "TwillioMockResponseError",
    "TwillioMockServer",
    "TwillioMockTimeoutError",
    "create_twillio_mock_client",
    "create_twillio_mock_server",
]
