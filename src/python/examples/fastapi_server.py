from fastapi import FastAPI

from webmention_engine import WebmentionsHandler
from webmention_engine.server.adapters.fastapi import bind_webmentions

from ._callbacks import log_mention

app = FastAPI()


def run_server(address: str, port: int):
    """
    Run a local FastAPI Webmention receiver.
    """
    handler = WebmentionsHandler(
        # This should match the public base URL of your site
        base_url=f"http://{address}:{port}",
        on_mention_received=log_mention,
    )

    bind_webmentions(app, handler)

    try:
        import uvicorn  # type: ignore
    except ImportError as e:  # pragma: no cover
        raise RuntimeError(
            "uvicorn is required to run the example server. "
            "Install it with: pip install uvicorn"
        ) from e

    uvicorn.run(app, host=address, port=port)
