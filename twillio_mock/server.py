"""
Local mock of the provider's SMS REST API.

Messages posted to the provider-shaped endpoint are kept in memory, newest
first, and can be listed or cleared through ``/api/messages`` so tests can
assert on what was "sent".
"""
import os
import threading
import time
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from .config import settings
from .logging_utils import log_sent_message, logger, logging_middleware, uvicorn_log_level
from .metrics import MetricsCollector
from .models import (
    API_VERSION,
    ClearMessagesResponse,
    CreateMessageRequest,
    ErrorResponse,
    HealthResponse,
    Message,
)
from .storage import MessageStore
from .utils import generate_message_sid, iso_now


REQUIRED_FIELDS = ("To", "From", "Body")

ERROR_CODE_INVALID_PARAMETER = 21211
ERROR_CODE_INTERNAL = 20001

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept, Authorization",
}

STARTUP_TIMEOUT_S = 10.0


# ---------- Middleware / helpers ----------


async def cors_middleware(request: Request, call_next: Callable) -> Response:
    # preflight never reaches the routes
    if request.method == "OPTIONS":
        response = Response(status_code=status.HTTP_200_OK)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def read_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a dict, from JSON or form encoding.

    A body that cannot be parsed is treated as empty so it fails the
    required-field check instead of raising.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    try:
        form = await request.form()
    except (HTTPException, MultiPartException):
        return {}
    # uploaded files are not message fields
    return {key: value for key, value in form.items() if isinstance(value, str)}


def error_response(status_code: int, error: str, code: int, message: str) -> JSONResponse:
    payload = ErrorResponse(error=error, code=code, message=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def format_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


# ---------- Server ----------


class TwillioMockServer:
    """
    Mock SMS API server owning its own app and message store.

    Usage:

        server = TwillioMockServer(port=3030)
        server.start()
        ...
        server.get_messages()
        server.stop()

    or as a context manager:

        with TwillioMockServer(port=3030) as server:
            ...
    """

    def __init__(
        self,
        port: Optional[int] = None,
        enable_cors: Optional[bool] = None,
        static_dir: Optional[str] = None,
        host: Optional[str] = None,
        sid_generator: Callable[[], str] = generate_message_sid,
    ):
        self._port = settings.PORT if port is None else port
        self._enable_cors = settings.ENABLE_CORS if enable_cors is None else enable_cors
        self._static_dir = settings.STATIC_DIR if static_dir is None else static_dir
        self._host = settings.HOST if host is None else host
        self._sid_generator = sid_generator

        self.store = MessageStore()
        self.metrics = MetricsCollector()
        self._created_at = time.monotonic()

        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

        self.app = FastAPI(title="Twillio Mock Server", version=API_VERSION)
        self.app.state.metrics = self.metrics
        self._setup_middleware()
        self._setup_routes()
        self._setup_static()

    # ---------- Configuration ----------

    @property
    def port(self) -> int:
        return self._port

    @property
    def host(self) -> str:
        return self._host

    @property
    def enable_cors(self) -> bool:
        return self._enable_cors

    @property
    def static_dir(self) -> str:
        return self._static_dir

    @property
    def uptime(self) -> float:
        return time.monotonic() - self._created_at

    # ---------- App wiring ----------

    def _setup_middleware(self) -> None:
        # the last middleware added runs first, so logging sees CORS replies
        if self._enable_cors:
            self.app.middleware("http")(cors_middleware)
        self.app.middleware("http")(logging_middleware)

    def _setup_routes(self) -> None:
        app = self.app

        @app.post(f"/{API_VERSION}/Accounts/{{account_sid}}/Messages.json")
        async def create_message(account_sid: str, request: Request):
            payload = await read_payload(request)

            if not all(payload.get(field) for field in REQUIRED_FIELDS):
                return self._reject(
                    request,
                    error="Missing required fields",
                    message="To, From, and Body are required fields",
                )

            try:
                params = CreateMessageRequest.model_validate(payload)
            except ValidationError as exc:
                return self._reject(
                    request,
                    error="Invalid parameter",
                    message=format_validation_error(exc),
                )

            try:
                message = Message.build(
                    sid=self._sid_generator(),
                    account_sid=account_sid,
                    to=params.To,
                    from_=params.From,
                    body=params.Body,
                    created_at=iso_now(),
                )
                self.store.insert_message(message)
            except Exception as exc:
                logger.exception("Failed to create message")
                self.metrics.inc_message_result("error")
                request.state.log_extra.update({"result": "error"})
                return error_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    error="Internal server error",
                    code=ERROR_CODE_INTERNAL,
                    message=str(exc) or exc.__class__.__name__,
                )

            self.metrics.inc_message_result("created")
            request.state.log_extra.update({"sid": message.sid, "result": "created"})
            log_sent_message(message)

            return JSONResponse(status_code=status.HTTP_201_CREATED, content=message.to_json())

        @app.get("/api/messages")
        async def list_messages():
            return [m.to_json() for m in self.store.list_messages()]

        @app.delete("/api/messages")
        async def clear_messages():
            self.store.clear()
            return ClearMessagesResponse(success=True, message="All messages cleared").model_dump()

        @app.get("/health")
        async def health():
            return HealthResponse(
                status="ok",
                messages=self.store.count(),
                uptime=round(self.uptime, 3),
            ).model_dump()

        @app.get("/metrics")
        async def metrics():
            return PlainTextResponse(content=self.metrics.render(), media_type="text/plain")

    def _setup_static(self) -> None:
        # mounted last so the API routes above take precedence
        if os.path.isdir(self._static_dir):
            self.app.mount("/", StaticFiles(directory=self._static_dir, html=True), name="static")
        else:
            logger.warning(f"Static directory not found, UI disabled: {self._static_dir}")

    def _reject(self, request: Request, *, error: str, message: str) -> JSONResponse:
        self.metrics.inc_message_result("validation_error")
        request.state.log_extra.update({"result": "validation_error"})
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            error=error,
            code=ERROR_CODE_INVALID_PARAMETER,
            message=message,
        )

    # ---------- Lifecycle ----------

    def is_running(self) -> bool:
        return self._server is not None

    def start(self) -> None:
        """Serve the app on a background thread; returns once it is listening."""
        if self._server is not None:
            logger.warning("Server is already running")
            return

        config = uvicorn.Config(
            self.app,
            host=self._host,
            port=self._port,
            log_level=uvicorn_log_level(settings.LOG_LEVEL),
            lifespan="off",
        )
        server = uvicorn.Server(config)
        thread = threading.Thread(target=server.run, name="twillio-mock-server", daemon=True)
        thread.start()

        deadline = time.monotonic() + STARTUP_TIMEOUT_S
        while not server.started:
            if not thread.is_alive() or time.monotonic() > deadline:
                server.should_exit = True
                thread.join(timeout=1.0)
                raise RuntimeError(f"Twillio Mock Server failed to start on port {self._port}")
            time.sleep(0.01)

        self._server = server
        self._thread = thread
        self._log_banner()

    def stop(self) -> None:
        if self._server is None:
            return
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=STARTUP_TIMEOUT_S)
        self._server = None
        self._thread = None
        logger.info("Server stopped")

    def run(self) -> None:
        """Serve in the foreground until interrupted (used by the CLI)."""
        self._log_banner()
        uvicorn.run(
            self.app,
            host=self._host,
            port=self._port,
            log_level=uvicorn_log_level(settings.LOG_LEVEL),
            lifespan="off",
        )

    def _log_banner(self) -> None:
        base = f"http://localhost:{self._port}"
        logger.info(f"Twillio Mock Server running on {base}")
        logger.info(f"View messages at: {base}")
        logger.info(f"API endpoint: {base}/{API_VERSION}/Accounts/{{AccountSid}}/Messages.json")
        logger.info(f"Point your SMS client at: TWILIO_API_URL={base}")

    def __enter__(self) -> "TwillioMockServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    # ---------- Direct accessors ----------

    def get_app(self) -> FastAPI:
        return self.app

    def get_messages(self) -> List[Message]:
        return self.store.list_messages()

    def clear_messages(self) -> None:
        self.store.clear()


def create_twillio_mock_server(**kwargs: Any) -> TwillioMockServer:
    """Create a new server instance; see ``TwillioMockServer`` for options."""
    return TwillioMockServer(**kwargs)
