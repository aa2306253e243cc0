"""
Start a mock server, send a message through the client, list and clear.

    python examples/basic.py
"""
import asyncio

from twillio_mock import TwillioMockClient, TwillioMockServer


async def exercise(client: TwillioMockClient) -> None:
    message = await client.messages.create(
        to="+1234567890",
        from_="+0987654321",
        body="Hello from Twillio Mock!",
    )
    print(f"Message sent: {message.sid}")
    print(f"  to={message.to} from={message.from_} status={message.status}")

    messages = await client.messages.list()
    print(f"Total messages: {len(messages)}")

    await client.messages.clear()
    remaining = await client.messages.list()
    print(f"Remaining messages: {len(remaining)}")


def main() -> None:
    with TwillioMockServer(port=3030):
        client = TwillioMockClient(base_url="http://localhost:3030", debug=True)
        asyncio.run(exercise(client))


if __name__ == "__main__":
    main()
