import secrets
from datetime import datetime, timezone


SID_PREFIX = "SM"
_HEX_CHARS = "abcdef0123456789"


def generate_random_string(length: int) -> str:
    """Return ``length`` random lowercase hex characters."""
    return "".join(secrets.choice(_HEX_CHARS) for _ in range(length))


def generate_message_sid() -> str:
    """Return a provider-style message sid: ``SM`` + 32 hex characters."""
    return f"{SID_PREFIX}{generate_random_string(32)}"


def iso_now() -> str:
    # millisecond precision, Z suffix
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
