import fastapi as fastapi_upstream  # pylint: disable=W0406

if getattr(fastapi_upstream, "__file__", None) == __file__:
    raise RuntimeError(
        "Local module name 'fastapi.py' is shadowing the upstream 'fastapi' dependency. "
        "Do not run this file directly; import it as "
        "'webmention_engine.server.adapters.fastapi'."
    )

FastAPI = fastapi_upstream.FastAPI
Form = fastapi_upstream.Form
HTTPException = fastapi_upstream.HTTPException
Request = fastapi_upstream.Request

from ...handlers import WebmentionsHandler
from ..._constants import FORM_CONTENT_TYPE
from ..._exceptions import WebmentionException
from ._common import (
    append_link_header,
    is_form_content_type,
    is_text_content_type,
    webmention_link_header_value,
)


def _install_webmentions_link_header_middleware(app: FastAPI):
    if getattr(app.state, "_webmentions_link_header_middleware_installed", False):
        return None

    app.state._webmentions_link_header_middleware_installed = True

    @app.middleware("http")
    async def _webmentions_link_header_middleware(request, call_next):
        response = await call_next(request)
        if is_text_content_type(response.headers.get("content-type")):
            existing = response.headers.get("link")
            for endpoint in sorted(getattr(app.state, "_webmentions_endpoints", set())):
                existing = append_link_header(
                    existing, webmention_link_header_value(endpoint)
                )
            if existing is not None:
                response.headers["link"] = existing
        return response

    return _webmentions_link_header_middleware


def bind_webmentions(
    app: FastAPI, handler: "WebmentionsHandler", route: str = "/webmention"
):
    """
    Bind a FastAPI endpoint to process incoming Webmentions.

    :param app: The FastAPI application to bind the endpoint to.
    :param handler: The WebmentionsHandler to use for processing incoming Webmentions.
    :param route: The route to bind the endpoint to.
    """

    if not hasattr(app.state, "_webmentions_endpoints"):
        app.state._webmentions_endpoints = set()

    app.state._webmentions_endpoints.add(route)
    _install_webmentions_link_header_middleware(app)

    @app.post(route)
    def webmention(
        request: Request,
        source: str | None = Form(default=None),
        target: str | None = Form(default=None),
    ):
        if not is_form_content_type(request.headers.get("content-type")):
            raise HTTPException(
                status_code=415, detail=f"Content type must be {FORM_CONTENT_TYPE}"
            )

        try:
            handler.process_incoming_webmention(source, target)
        except WebmentionException as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        return {"status": "ok"}

    return webmention
