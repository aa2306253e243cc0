"""
Run the mock server in the foreground.

    python -m twillio_mock --port 3030
"""
import argparse

from .config import settings
from .server import TwillioMockServer


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="twillio-mock",
        description="Local mock of the SMS provider API.",
    )
    parser.add_argument("--port", type=int, default=settings.PORT, help="port to listen on")
    parser.add_argument("--host", default=settings.HOST, help="address to bind")
    parser.add_argument(
        "--no-cors",
        dest="enable_cors",
        action="store_false",
        default=settings.ENABLE_CORS,
        help="do not send CORS headers",
    )
    parser.add_argument("--static-dir", default=settings.STATIC_DIR, help="directory served at /")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    server = TwillioMockServer(
        port=args.port,
        host=args.host,
        enable_cors=args.enable_cors,
        static_dir=args.static_dir,
    )
    server.run()


if __name__ == "__main__":
    main()
