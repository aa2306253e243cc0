from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


API_VERSION = "2010-04-01"
DEFAULT_ACCOUNT_SID = "AC00000000000000000000000000000000"


def message_uri(account_sid: str, sid: str) -> str:
    return f"/{API_VERSION}/Accounts/{account_sid}/Messages/{sid}.json"


def media_uri(account_sid: str, sid: str) -> str:
    return f"/{API_VERSION}/Accounts/{account_sid}/Messages/{sid}/Media.json"


# ---------- Message ----------


class SubresourceUris(BaseModel):
    model_config = ConfigDict(frozen=True)

    media: str


class Message(BaseModel):
    """A simulated outbound SMS, shaped like the provider's API resource."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sid: str
    date_created: str
    date_updated: str
    date_sent: str
    account_sid: str
    to: str
    from_: str = Field(alias="from")
    body: str
    status: str = "sent"
    num_segments: str = "1"
    num_media: str = "0"
    direction: str = "outbound-api"
    api_version: str = API_VERSION
    price: Optional[str] = None
    price_unit: str = "USD"
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    uri: str
    subresource_uris: SubresourceUris

    @classmethod
    def build(
        cls,
        *,
        sid: str,
        account_sid: str,
        to: str,
        from_: str,
        body: str,
        created_at: str,
    ) -> "Message":
        return cls(
            sid=sid,
            date_created=created_at,
            date_updated=created_at,
            date_sent=created_at,
            account_sid=account_sid,
            to=to,
            from_=from_,
            body=body,
            uri=message_uri(account_sid, sid),
            subresource_uris=SubresourceUris(media=media_uri(account_sid, sid)),
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


# ---------- Request / response payloads ----------


class CreateMessageRequest(BaseModel):
    """Fields of a create-message call. Presence is checked by the route."""

    To: str
    From: str
    Body: str
    # accepted but never stored, so any value is fine
    MessagingServiceSid: Any = None


class HealthResponse(BaseModel):
    status: str
    messages: int
    uptime: float


class ClearMessagesResponse(BaseModel):
    success: bool
    message: str


class ErrorResponse(BaseModel):
    error: str
    code: int
    message: str


class APIResponse(BaseModel):
    """Raw client result: parsed JSON, or the response text when it is not JSON."""

    status_code: int
    data: Any = None
