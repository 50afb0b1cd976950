"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from view_layer.helpers.server_url import ServerUrl
from view_layer.helpers.url import RouteMatch
from view_layer.renderers import HtmlRenderer, JsonRenderer
from view_layer.resolvers import AggregateResolver


async def get_resolver(request: Request) -> AggregateResolver:
    """
    Get the template resolver chain from app state.

    Raises:
        RuntimeError: If the resolver is not initialized.
    """
    resolver: AggregateResolver | None = getattr(request.app.state, "resolver", None)

    if resolver is None:
        raise RuntimeError("Template resolver not initialized.")

    return resolver


async def get_json_renderer(request: Request) -> JsonRenderer:
    """
    Get the shared JSON renderer from app state.

    Raises:
        RuntimeError: If the renderer is not initialized.
    """
    renderer: JsonRenderer | None = getattr(request.app.state, "json_renderer", None)

    if renderer is None:
        raise RuntimeError("JSON renderer not initialized.")

    return renderer


async def get_html_renderer(request: Request) -> HtmlRenderer:
    """
    Get the shared HTML renderer with its helpers bound to this request.

    The ``url`` helper gets the application router and the matched route,
    the ``server_url`` helper gets the request's environment snapshot.

    Raises:
        RuntimeError: If the renderer is not initialized.
    """
    renderer: HtmlRenderer | None = getattr(request.app.state, "html_renderer", None)

    if renderer is None:
        raise RuntimeError("HTML renderer not initialized.")

    renderer.plugin("url").set_router(request.app.router).set_route_match(RouteMatch.from_request(request))
    renderer.plugin("server_url").set_environ(ServerUrl.environ_from_request(request))
    return renderer
