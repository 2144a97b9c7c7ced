import argparse
import logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Webmention engine examples")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser(
        "serve", help="Run a local Webmention receiver"
    )
    serve.add_argument(
        "--backend",
        choices=("fastapi", "flask"),
        default="fastapi",
        help="Web framework backend to use",
    )
    serve.add_argument(
        "--address",
        default="127.0.0.1",
        help="Bind address",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Bind port",
    )

    send = subparsers.add_parser(
        "send", help="Send a Webmention from a source to a target"
    )
    send.add_argument("source", help="URL of the page that mentions the target")
    send.add_argument("target", help="URL of the mentioned page")
    return parser


def _send(source: str, target: str):
    from webmention_engine import WebmentionsHandler

    outcome = WebmentionsHandler().send_webmention(source, target)
    print(f"Accepted with status {outcome.status_code}")
    if outcome.monitor_location:
        print(f"Status can be monitored at {outcome.monitor_location}")


def main(argv: list[str] | None = None):
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "send":
        _send(args.source, args.target)
        return

    if args.backend == "fastapi":
        try:
            from .fastapi_server import run_server
        except ImportError as e:  # pragma: no cover
            raise RuntimeError(
                "FastAPI example dependencies are missing. "
                "Install them with: pip install 'webmention-engine[fastapi]'"
            ) from e
    else:
        try:
            from .flask_server import run_server
        except ImportError as e:  # pragma: no cover
            raise RuntimeError(
                "Flask example dependencies are missing. "
                "Install them with: pip install 'webmention-engine[flask]'"
            ) from e

    run_server(address=args.address, port=args.port)


if __name__ == "__main__":
    main()
