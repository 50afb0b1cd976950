"""Page routes rendering view model trees as HTML and JSON."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from view_layer import __version__
from view_layer.config import Settings, get_settings
from view_layer.dependencies import get_html_renderer, get_json_renderer
from view_layer.helpers import NavigationPage, RouteMatch, ServerUrl, Url
from view_layer.models import JsonModel, ViewModel
from view_layer.renderers import HtmlRenderer, JsonRenderer
from view_layer.views import ViewResponse

router = APIRouter()

JSONP_CALLBACK_PATTERN = r"^([A-Za-z_$][A-Za-z0-9_$.]*)?$"


def build_navigation(url: Url) -> list[NavigationPage]:
    """Site navigation with URIs assembled from route names."""
    return [
        NavigationPage(label="Home", uri=url("home")),
        NavigationPage(
            label="Examples",
            uri=url("default", {"controller": "example", "action": "index"}),
            pages=[
                NavigationPage(
                    label="JSONP",
                    uri=url("default", {"controller": "example", "action": "index"}, {"query": {"callback": "render"}}),
                ),
            ],
        ),
        NavigationPage(label="Health", uri=url("health")),
    ]


@router.get("/", response_class=HTMLResponse, name="home")
async def home(renderer: HtmlRenderer = Depends(get_html_renderer)):
    """Render the home page from a layout model with a captured status partial."""
    layout = ViewModel({"title": "View Layer"})
    layout.set_template("index")

    status = ViewModel({"state": "ok", "version": __version__})
    status.set_template("partials/status")
    layout.add_child(status, capture_to="status")

    pages = build_navigation(renderer.plugin("url"))
    return ViewResponse.html(renderer.render(layout, {"pages": pages}))


@router.get("/{controller}/{action}", name="default")
async def dispatch(
    request: Request,
    controller: str,
    action: str,
    callback: str | None = Query(default=None, pattern=JSONP_CALLBACK_PATTERN),
    renderer: JsonRenderer = Depends(get_json_renderer),
    settings: Settings = Depends(get_settings),
):
    """Render a JsonModel tree describing the matched route.

    ``links`` is a captured child; ``meta`` is uncaptured and only appears
    when merging of unnamed children is enabled.
    """
    url = Url(request.app.router, RouteMatch.from_request(request))
    server_url = ServerUrl.from_request(request, use_proxy=settings.server_url_use_proxy)

    model = JsonModel({"controller": controller, "action": action})
    model.set_jsonp_callback(callback)

    links = ViewModel({"self": server_url(url(reuse_matched_params=True)), "home": server_url(url("home"))})
    model.add_child(links, capture_to="links")

    meta = ViewModel({"version": __version__})
    meta.set_capture_to(None)
    model.add_child(meta)

    return ViewResponse.json(renderer.render(model), jsonp=model.jsonp_callback is not None)
