"""Renderers turning view models into text."""

from view_layer.renderers.console_renderer import ConsoleRenderer
from view_layer.renderers.html_renderer import HtmlRenderer, ResolverLoader
from view_layer.renderers.json_renderer import JsonRenderer

__all__ = [
    "ConsoleRenderer",
    "HtmlRenderer",
    "JsonRenderer",
    "ResolverLoader",
]
