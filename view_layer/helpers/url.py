"""Url helper: assembles paths for named routes."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from starlette.requests import Request
from starlette.routing import NoMatchFound

from view_layer.exceptions import InvalidArgumentException, RuntimeException
from view_layer.helpers.base import AbstractHelper
from view_layer.logging_config import get_logger, log_with_context
from view_layer.protocols import RouterProtocol

logger = get_logger(__name__)


@dataclass
class RouteMatch:
    """The route a request matched and the parameters it matched with."""

    params: dict[str, Any] = field(default_factory=dict)
    matched_route_name: str | None = None

    def get_param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    @classmethod
    def from_request(cls, request: Request) -> "RouteMatch":
        """Build a route match from the scope Starlette routing filled in."""
        route = request.scope.get("route")
        if route is None:
            endpoint = request.scope.get("endpoint")
            router = getattr(request.scope.get("app"), "router", None)
            for candidate in getattr(router, "routes", []):
                if endpoint is not None and getattr(candidate, "endpoint", None) is endpoint:
                    route = candidate
                    break
        return cls(params=dict(request.path_params), matched_route_name=getattr(route, "name", None))


def _normalize_params(params: Any) -> dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return dict(params)
    if isinstance(params, Iterable) and not isinstance(params, (str, bytes)):
        try:
            return dict(params)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentException(
                "Params is expected to be a mapping or an iterable of key/value pairs", details={"error": str(e)}
            ) from e
    raise InvalidArgumentException(
        f"Params is expected to be a mapping or an iterable of key/value pairs; received {type(params).__name__}"
    )


class Url(AbstractHelper):
    """Generate a URL path for a named route.

    With no route name the currently matched route is used, which makes
    "link to this page with other parameters" a one-liner in templates.
    """

    def __init__(self, router: RouterProtocol | None = None, route_match: RouteMatch | None = None):
        super().__init__()
        self.router = router
        self.route_match = route_match

    def set_router(self, router: RouterProtocol) -> "Url":
        self.router = router
        return self

    def set_route_match(self, route_match: RouteMatch | None) -> "Url":
        self.route_match = route_match
        return self

    def __call__(
        self,
        name: str | None = None,
        params: Any = None,
        options: Mapping[str, Any] | bool | None = None,
        reuse_matched_params: bool = False,
    ) -> str:
        """Assemble a URL path.

        Args:
            name: Route name; defaults to the matched route
            params: Route parameters (mapping or iterable of pairs)
            options: ``query`` (mapping) and ``fragment`` (str); a bool here
                is taken as ``reuse_matched_params``
            reuse_matched_params: Start from the matched route's parameters

        Raises:
            RuntimeException: If there is no router, no route to fall back to,
                or the route cannot be assembled with these parameters
            InvalidArgumentException: If params has the wrong shape
        """
        if self.router is None:
            raise RuntimeException("No router instance provided")

        if isinstance(options, bool):
            reuse_matched_params = options
            options = None
        options = dict(options or {})

        if name is None:
            if self.route_match is None:
                raise RuntimeException("No RouteMatch instance provided")
            name = self.route_match.matched_route_name
            if name is None:
                raise RuntimeException("RouteMatch does not contain a matched route name")

        route_params = _normalize_params(params)
        if reuse_matched_params and self.route_match is not None:
            route_params = {**self.route_match.params, **route_params}

        try:
            path = str(self.router.url_path_for(name, **route_params))
        except (NoMatchFound, AssertionError) as e:
            log_with_context(
                logger,
                "warning",
                "Unable to assemble route",
                route=name,
                params=list(route_params),
                event_type="url_assemble_failed",
            )
            raise RuntimeException(
                f'Unable to assemble URL for route "{name}"',
                details={"route": name, "params": sorted(route_params)},
            ) from e

        query = options.get("query")
        if query:
            path = f"{path}?{urlencode(query, doseq=True)}"
        fragment = options.get("fragment")
        if fragment:
            path = f"{path}#{fragment}"
        return path
