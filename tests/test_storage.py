from twillio_mock.models import Message
from twillio_mock.storage import MessageStore


def make_message(n: int) -> Message:
    return Message.build(
        sid=f"SM{n:032x}",
        account_sid="AC1",
        to="+1",
        from_="+2",
        body=f"message {n}",
        created_at="2025-01-15T10:00:00.000Z",
    )


def test_store_starts_empty():
    store = MessageStore()

    assert store.list_messages() == []
    assert store.count() == 0


def test_insert_puts_newest_first():
    store = MessageStore()
    for n in range(3):
        store.insert_message(make_message(n))

    assert [m.body for m in store.list_messages()] == ["message 2", "message 1", "message 0"]
    assert len(store) == 3


def test_list_returns_a_copy():
    store = MessageStore()
    store.insert_message(make_message(1))

    store.list_messages().pop()

    assert store.count() == 1


def test_clear():
    store = MessageStore()
    for n in range(5):
        store.insert_message(make_message(n))

    store.clear()

    assert store.list_messages() == []
    assert store.count() == 0
