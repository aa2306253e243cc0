import socket

from fastapi.testclient import TestClient


ACCOUNT_SID = "AC11111111111111111111111111111111"
MESSAGES_PATH = f"/2010-04-01/Accounts/{ACCOUNT_SID}/Messages.json"


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def send(http: TestClient, to="+1111", from_="+2222", body="hi", **extra):
    data = {"To": to, "From": from_, "Body": body}
    data.update(extra)
    return http.post(MESSAGES_PATH, data=data)
