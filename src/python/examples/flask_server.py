from flask import Flask

from webmention_engine import WebmentionsHandler
from webmention_engine.server.adapters.flask import bind_webmentions

from ._callbacks import log_mention

app = Flask(__name__)


def run_server(address: str, port: int):
    """
    Run a local Flask Webmention receiver.
    """
    handler = WebmentionsHandler(
        # This should match the public base URL of your site
        base_url=f"http://{address}:{port}",
        on_mention_received=log_mention,
    )

    bind_webmentions(app, handler)
    app.run(host=address, port=port)
