from twillio_mock import __main__ as cli
from twillio_mock.config import settings


def test_parse_args_defaults():
    args = cli.parse_args([])

    assert args.port == settings.PORT
    assert args.host == settings.HOST
    assert args.enable_cors == settings.ENABLE_CORS
    assert args.static_dir == settings.STATIC_DIR


def test_main_builds_server_from_flags(monkeypatch):
    started = []
    monkeypatch.setattr(cli.TwillioMockServer, "run", lambda self: started.append(self))

    cli.main(["--port", "4545", "--host", "127.0.0.1", "--no-cors", "--static-dir", "/srv/ui"])

    [server] = started
    assert server.port == 4545
    assert server.host == "127.0.0.1"
    assert server.enable_cors is False
    assert server.static_dir == "/srv/ui"
