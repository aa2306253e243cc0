import logging
import os
from pathlib import Path


DEFAULT_STATIC_DIR = str(Path(__file__).resolve().parent / "static")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _log_level(value: str) -> str:
    # canonical stdlib name, so aliases like WARN and FATAL work everywhere
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown LOG_LEVEL: {value!r}")
    return logging.getLevelName(level)


class Settings:
    def __init__(self) -> None:
        self.PORT: int = int(os.getenv("PORT", "3030"))
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.ENABLE_CORS: bool = _env_flag("ENABLE_CORS", True)
        self.STATIC_DIR: str = os.getenv("STATIC_DIR", DEFAULT_STATIC_DIR)
        self.LOG_LEVEL: str = _log_level(os.getenv("LOG_LEVEL", "INFO"))
        # default account for clients that do not pass one
        self.ACCOUNT_SID: str | None = os.getenv("TWILIO_ACCOUNT_SID")


settings = Settings()
