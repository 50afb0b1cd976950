"""Escaping helpers backed by markupsafe."""

from typing import Any

from markupsafe import Markup, escape

from view_layer.helpers.base import AbstractHelper


class EscapeHtml(AbstractHelper):
    """Escape a value for use in HTML body text."""

    def __call__(self, value: Any) -> Markup:
        return escape(value)


class EscapeHtmlAttr(AbstractHelper):
    """Escape a value for use inside a double-quoted HTML attribute."""

    def __call__(self, value: Any) -> Markup:
        return escape(value)
