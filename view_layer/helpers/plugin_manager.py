"""Registry of view helpers, looked up by name from renderers and templates."""

from collections.abc import Callable
from typing import Any

from view_layer.exceptions import InvalidArgumentException
from view_layer.helpers.doctype import Doctype
from view_layer.helpers.escape import EscapeHtml, EscapeHtmlAttr
from view_layer.helpers.html_tag import HtmlTag
from view_layer.helpers.navigation import Navigation
from view_layer.helpers.server_url import ServerUrl
from view_layer.helpers.url import Url

HelperFactory = Callable[[], Any]

DEFAULT_HELPERS: dict[str, HelperFactory] = {
    "doctype": Doctype,
    "escape_html": EscapeHtml,
    "escape_html_attr": EscapeHtmlAttr,
    "html_tag": HtmlTag,
    "navigation": Navigation,
    "server_url": ServerUrl,
    "url": Url,
}


def normalize_name(name: str) -> str:
    """Canonical lookup key: ``escapeHtmlAttr``, ``escape_html_attr`` and ``escapehtmlattr`` are one helper."""
    return name.replace("_", "").replace("-", "").lower()


class HelperPluginManager:
    """Create helpers on first use and hand out the shared instance afterwards.

    Each helper is bound to the manager's view (the renderer) when created.
    """

    def __init__(self, view: Any = None, factories: dict[str, HelperFactory] | None = None):
        self.view = view
        self._factories: dict[str, HelperFactory] = {}
        self._names: dict[str, str] = {}
        self._instances: dict[str, Any] = {}
        for name, factory in (factories if factories is not None else DEFAULT_HELPERS).items():
            self.register(name, factory)

    def register(self, name: str, factory: HelperFactory) -> "HelperPluginManager":
        """Register (or replace) a helper factory under ``name``."""
        key = normalize_name(name)
        self._factories[key] = factory
        self._names[key] = name
        self._instances.pop(key, None)
        return self

    def has(self, name: str) -> bool:
        return normalize_name(name) in self._factories

    def get(self, name: str) -> Any:
        """Return the shared helper instance for ``name``.

        Raises:
            InvalidArgumentException: If no helper is registered under ``name``
        """
        key = normalize_name(name)
        if key not in self._instances:
            if key not in self._factories:
                raise InvalidArgumentException(f'No helper registered under "{name}"', details={"helper": name})
            helper = self._factories[key]()
            if hasattr(helper, "set_view"):
                helper.set_view(self.view)
            self._instances[key] = helper
        return self._instances[key]

    def names(self) -> list[str]:
        """Registered helper names, as they were registered."""
        return list(self._names.values())
