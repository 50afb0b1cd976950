"""HtmlTag helper: renders the root ``<html>`` element with its attributes."""

from collections.abc import Mapping
from typing import Any

from markupsafe import Markup, escape

from view_layer.helpers.base import AbstractHelper
from view_layer.helpers.doctype import Doctype

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"


class HtmlTag(AbstractHelper):
    """Collect attributes for the ``<html>`` tag and print its open/close tags."""

    def __init__(self) -> None:
        super().__init__()
        self._attributes: dict[str, Any] = {}
        self._use_namespaces = False
        self._handled_namespaces = False

    def __call__(self) -> "HtmlTag":
        return self

    def set_attribute(self, name: str, value: Any) -> "HtmlTag":
        self._attributes[name] = value
        return self

    def set_attributes(self, attributes: Mapping[str, Any]) -> "HtmlTag":
        """Merge attributes, overwriting any that share a name."""
        for name, value in attributes.items():
            self.set_attribute(name, value)
        return self

    @property
    def attributes(self) -> dict[str, Any]:
        return self._attributes

    def get_attributes(self) -> dict[str, Any]:
        return self._attributes

    def set_use_namespaces(self, use_namespaces: bool) -> "HtmlTag":
        self._use_namespaces = bool(use_namespaces)
        return self

    @property
    def use_namespaces(self) -> bool:
        return self._use_namespaces

    def _doctype(self) -> Doctype:
        if self.view is not None and hasattr(self.view, "plugin"):
            return self.view.plugin("doctype")
        return Doctype()

    def _apply_namespaces(self) -> None:
        if self._handled_namespaces:
            return
        if self._doctype().is_xhtml():
            # xmlns goes first unless the caller already set it
            self._attributes = {"xmlns": XHTML_NAMESPACE, **self._attributes}
        self._handled_namespaces = True

    def _escape_attr(self, value: Any) -> Any:
        if self.view is not None and hasattr(self.view, "plugin"):
            return self.view.plugin("escape_html_attr")(value)
        return escape(value)

    def open_tag(self) -> Markup:
        if self._use_namespaces:
            self._apply_namespaces()
        rendered = "".join(f' {name}="{self._escape_attr(value)}"' for name, value in self._attributes.items())
        return Markup(f"<html{rendered}>")

    def close_tag(self) -> Markup:
        return Markup("</html>")
