"""Application lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from view_layer import __version__
from view_layer.config import Settings, get_settings
from view_layer.exceptions import ConfigurationException, ErrorCode
from view_layer.logging_config import get_logger, log_with_context
from view_layer.renderers import ConsoleRenderer, HtmlRenderer, JsonRenderer
from view_layer.resolvers import AggregateResolver, TemplateMapResolver, TemplatePathStack

logger = get_logger(__name__)

TEMPLATE_MAP_PRIORITY = 10
TEMPLATE_PATH_STACK_PRIORITY = 1


def build_resolver(settings: Settings) -> AggregateResolver:
    """Template map first (explicit entries win), then the directory stack.

    Raises:
        ConfigurationException: If the template map file is not a valid JSON object
    """
    try:
        template_map = settings.template_map
    except ValueError as e:
        raise ConfigurationException(
            str(e), code=ErrorCode.CONFIG_INVALID, details={"template_map_file": settings.template_map_file}
        ) from e

    resolver = AggregateResolver()
    resolver.attach(TemplateMapResolver(template_map), TEMPLATE_MAP_PRIORITY)
    resolver.attach(
        TemplatePathStack(settings.template_directories, default_suffix=settings.template_suffix),
        TEMPLATE_PATH_STACK_PRIORITY,
    )
    return resolver


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the resolver chain and renderers and keep them on ``app.state``."""
    settings = get_settings()

    log_with_context(
        logger,
        "info",
        "Starting view layer application",
        version=__version__,
        event_type="app_startup",
    )

    resolver = build_resolver(settings)
    html_renderer = HtmlRenderer(resolver)
    html_renderer.plugin("server_url").set_use_proxy(settings.server_url_use_proxy)

    app.state.resolver = resolver
    app.state.html_renderer = html_renderer
    app.state.json_renderer = JsonRenderer(merge_unnamed_children=settings.json_merge_unnamed_children)
    app.state.console_renderer = ConsoleRenderer()
    log_with_context(
        logger,
        "info",
        "Renderers initialized",
        template_paths=[str(p) for p in settings.template_directories],
        mapped_templates=len(settings.template_map),
        event_type="renderers_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down view layer application",
            event_type="app_shutdown",
        )
