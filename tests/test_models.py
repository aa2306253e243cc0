import pytest
from pydantic import ValidationError

from twillio_mock.models import CreateMessageRequest, Message


def build(**overrides) -> Message:
    fields = dict(
        sid="SM" + "a" * 32,
        account_sid="ACxyz",
        to="+1",
        from_="+2",
        body="hi",
        created_at="2025-01-15T10:00:00.000Z",
    )
    fields.update(overrides)
    return Message.build(**fields)


def test_build_fills_constants_and_uris():
    message = build()

    assert message.status == "sent"
    assert message.date_created == message.date_updated == message.date_sent
    assert message.uri == f"/2010-04-01/Accounts/ACxyz/Messages/{message.sid}.json"
    assert message.subresource_uris.media == f"/2010-04-01/Accounts/ACxyz/Messages/{message.sid}/Media.json"


def test_json_uses_from_alias():
    data = build().to_json()

    assert data["from"] == "+2"
    assert "from_" not in data


def test_parses_provider_json():
    data = build().to_json()

    assert Message.model_validate(data).from_ == "+2"


def test_message_is_immutable():
    message = build()

    with pytest.raises(ValidationError):
        message.body = "changed"


def test_create_request_requires_string_fields():
    with pytest.raises(ValidationError):
        CreateMessageRequest(To=1111, From="+2", Body="hi")

    request = CreateMessageRequest(To="+1", From="+2", Body="hi")
    assert request.MessagingServiceSid is None


def test_create_request_accepts_any_messaging_service_sid():
    request = CreateMessageRequest(To="+1", From="+2", Body="hi", MessagingServiceSid=5)

    assert request.MessagingServiceSid == 5
