"""
Point the official provider SDK at the mock server.

    pip install -e ".[examples]"
    twillio-mock --port 3030 &
    TWILIO_API_URL=http://localhost:3030 python examples/with_provider_sdk.py

In an application, only swap the API base URL in development; everything
else (account sid, token, create call) stays as it is in production.
"""
import os

from twilio.rest import Client


def build_client() -> Client:
    account_sid = os.getenv("TWILIO_ACCOUNT_SID", "AC00000000000000000000000000000000")
    auth_token = os.getenv("TWILIO_AUTH_TOKEN", "test_token")
    client = Client(account_sid, auth_token)

    api_url = os.getenv("TWILIO_API_URL")
    if api_url:
        # every /2010-04-01 resource is resolved against this domain
        client.api.base_url = api_url.rstrip("/")
    return client


def main() -> None:
    client = build_client()
    message = client.messages.create(
        body="Hello from the provider SDK!",
        from_=os.getenv("TWILIO_PHONE_NUMBER", "+1234567890"),
        to="+0987654321",
    )
    print(f"Message sent via SDK: {message.sid} ({message.status})")


if __name__ == "__main__":
    main()
