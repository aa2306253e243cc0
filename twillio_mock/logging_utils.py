import json
import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from uvicorn.config import LOG_LEVELS

from .config import settings
from .models import Message
from .utils import iso_now


logger = logging.getLogger("twillio_mock")
logger.setLevel(settings.LOG_LEVEL)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(settings.LOG_LEVEL)
    logger.addHandler(handler)


BODY_PREVIEW_LENGTH = 50


def summarize_message(message: Message) -> str:
    body = message.body[:BODY_PREVIEW_LENGTH]
    if len(message.body) > BODY_PREVIEW_LENGTH:
        body += "..."
    return f"[SMS SENT] To: {message.to}, From: {message.from_}, Body: {body}"


def uvicorn_log_level(level: str) -> str:
    """Map a stdlib level name onto one uvicorn accepts."""
    name = level.lower()
    return name if name in LOG_LEVELS else "info"


def log_sent_message(message: Message) -> None:
    logger.info(summarize_message(message))


UNMATCHED_PATH = "unmatched"


def _route_path(request: Request) -> str:
    # templated path keeps account sids out of metric labels; static files,
    # preflights and 404s share one label
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_PATH)


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    request_id = str(uuid.uuid4())
    start = time.perf_counter()
    metrics = request.app.state.metrics

    # handlers add fields here (e.g. sid, result)
    request.state.request_id = request_id
    request.state.log_extra = {}

    response: Response
    try:
        response = await call_next(request)
    except Exception:
        latency_ms = (time.perf_counter() - start) * 1000.0
        metrics.inc_http_request(_route_path(request), 500)
        log = {
            "ts": iso_now(),
            "level": "error",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": 500,
            "latency_ms": round(latency_ms, 2),
        }
        logger.error(json.dumps(log))
        raise

    latency_ms = (time.perf_counter() - start) * 1000.0
    status_code = response.status_code

    metrics.inc_http_request(_route_path(request), status_code)
    metrics.observe_latency_ms(latency_ms)

    log = {
        "ts": iso_now(),
        "level": "info",
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status": status_code,
        "latency_ms": round(latency_ms, 2),
    }

    if isinstance(getattr(request.state, "log_extra", None), dict):
        log.update(request.state.log_extra)

    logger.info(json.dumps(log))
    return response
