"""
Async HTTP client for the Twillio mock server.

    client = TwillioMockClient(base_url="http://localhost:3030")
    message = await client.messages.create(to="+15550001", from_="+15550002", body="hi")
    sent = await client.messages.list()
    await client.messages.clear()
"""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import settings
from .exceptions import (
    TwillioMockConfigError,
    TwillioMockConnectionError,
    TwillioMockResponseError,
    TwillioMockTimeoutError,
)
from .models import API_VERSION, DEFAULT_ACCOUNT_SID, APIResponse, HealthResponse, Message


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_PORTS = {"http": 80, "https": 443}
# dual-stack lookups of these can stall on ::1 when the server listens on IPv4
LOOPBACK_HOSTS = ("localhost", "127.0.0.1")

_MESSAGE_LIST = TypeAdapter(List[Message])

M = TypeVar("M", bound=BaseModel)


def _raw_text(data: Any) -> str:
    return data if isinstance(data, str) else json.dumps(data)


class MessagesAPI:
    """The ``client.messages`` namespace."""

    def __init__(self, client: "TwillioMockClient") -> None:
        self._client = client

    async def create(
        self,
        to: str,
        from_: str,
        body: str,
        messaging_service_sid: Optional[str] = None,
    ) -> Message:
        """Send a message; returns the record the server stored."""
        form_data = {"To": to, "From": from_, "Body": body}
        if messaging_service_sid:
            form_data["MessagingServiceSid"] = messaging_service_sid

        path = f"/{API_VERSION}/Accounts/{self._client.account_sid}/Messages.json"
        response = await self._client.request("POST", path, form_data=form_data)
        return self._client.parse(Message, response)

    async def list(self) -> List[Message]:
        """All messages on the server, most recent first."""
        response = await self._client.request("GET", "/api/messages")
        try:
            return _MESSAGE_LIST.validate_python(response.data)
        except ValidationError as exc:
            raise TwillioMockResponseError(
                response.status_code,
                _raw_text(response.data),
                message=f"Unexpected response body for message list: {exc}",
            ) from exc

    async def clear(self) -> None:
        await self._client.request("DELETE", "/api/messages")


class TwillioMockClient:
    """
    Stateless request wrapper around the mock server's HTTP API.

    ``timeout`` is in milliseconds and bounds each call as a whole. A
    ``transport`` can be passed to route requests somewhere other than the
    network (e.g. ``httpx.ASGITransport`` for an in-process app); it is
    closed along with the per-call ``httpx.AsyncClient``, so it must tolerate
    that.
    """

    def __init__(
        self,
        base_url: str,
        account_sid: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT_MS,
        debug: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not base_url:
            raise TwillioMockConfigError("base_url is required")
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise TwillioMockConfigError(f"Invalid base_url: {base_url}") from exc
        if url.scheme not in DEFAULT_PORTS or not url.host:
            raise TwillioMockConfigError(
                f"base_url must be an http:// or https:// URL, got {base_url!r}"
            )

        self._base_url = url
        self._account_sid = account_sid or settings.ACCOUNT_SID or DEFAULT_ACCOUNT_SID
        self._timeout = timeout or DEFAULT_TIMEOUT_MS
        self._debug = debug
        self._transport = transport

        self.messages = MessagesAPI(self)

    # ---------- Configuration ----------

    @property
    def base_url(self) -> str:
        return str(self._base_url)

    @property
    def account_sid(self) -> str:
        return self._account_sid

    @property
    def timeout(self) -> int:
        return self._timeout

    @property
    def debug(self) -> bool:
        return self._debug

    # ---------- Operations ----------

    async def health(self) -> HealthResponse:
        response = await self.request("GET", "/health")
        return self.parse(HealthResponse, response)

    def parse(self, model: Type[M], response: APIResponse) -> M:
        try:
            return model.model_validate(response.data)
        except ValidationError as exc:
            raise TwillioMockResponseError(
                response.status_code,
                _raw_text(response.data),
                message=f"Unexpected response body for {model.__name__}: {exc}",
            ) from exc

    # ---------- Transport ----------

    def target_url(self, path: str) -> httpx.URL:
        scheme = self._base_url.scheme
        port = self._base_url.port or DEFAULT_PORTS[scheme]
        return httpx.URL(scheme=scheme, host=self._base_url.host, port=port, path=path)

    def _build_transport(self) -> httpx.AsyncBaseTransport:
        if self._transport is not None:
            return self._transport
        if self._base_url.host in LOOPBACK_HOSTS:
            # binding the source address to 0.0.0.0 forces an IPv4 connection
            return httpx.AsyncHTTPTransport(local_address="0.0.0.0")
        return httpx.AsyncHTTPTransport()

    async def request(
        self,
        method: str,
        path: str,
        form_data: Optional[Dict[str, str]] = None,
    ) -> APIResponse:
        """
        Perform one round trip and return the parsed body.

        Non-JSON 2xx bodies come back as text. Failures are raised as
        ``TwillioMockClientError`` subclasses.
        """
        url = self.target_url(path)
        if self._debug:
            logger.info(f"[TwillioMock] {method} {url.scheme}://{url.host}:{url.port or DEFAULT_PORTS[url.scheme]}{path}")

        timeout_s = self._timeout / 1000.0
        try:
            response = await asyncio.wait_for(
                self._send(method, url, form_data, timeout_s),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            if self._debug:
                logger.error(f"[TwillioMock] Request error: {exc!r}")
            raise TwillioMockTimeoutError(self._timeout) from exc
        except httpx.RequestError as exc:
            if self._debug:
                logger.error(f"[TwillioMock] Request error: {exc!r}")
            raise TwillioMockConnectionError(
                f"Could not connect to mock server at {url}: {exc!r}"
            ) from exc

        text = response.text
        if not 200 <= response.status_code < 300:
            raise TwillioMockResponseError(response.status_code, text)

        try:
            data = response.json()
        except ValueError:
            # the server always answers JSON, but keep the body if it did not
            data = text
        return APIResponse(status_code=response.status_code, data=data)

    async def _send(
        self,
        method: str,
        url: httpx.URL,
        form_data: Optional[Dict[str, str]],
        timeout_s: float,
    ) -> httpx.Response:
        data = form_data if method in ("POST", "PUT") else None
        async with httpx.AsyncClient(
            transport=self._build_transport(),
            timeout=httpx.Timeout(timeout_s),
        ) as client:
            return await client.request(method, url, data=data)


def create_twillio_mock_client(**kwargs: Any) -> TwillioMockClient:
    """Create a new client; see ``TwillioMockClient`` for options."""
    return TwillioMockClient(**kwargs)
