"""View helpers exposed to templates through the helper plugin manager."""

from view_layer.helpers.base import AbstractHelper
from view_layer.helpers.doctype import Doctype
from view_layer.helpers.escape import EscapeHtml, EscapeHtmlAttr
from view_layer.helpers.html_tag import HtmlTag
from view_layer.helpers.navigation import Navigation, NavigationPage
from view_layer.helpers.plugin_manager import HelperPluginManager
from view_layer.helpers.server_url import ServerUrl
from view_layer.helpers.url import RouteMatch, Url

__all__ = [
    "AbstractHelper",
    "Doctype",
    "EscapeHtml",
    "EscapeHtmlAttr",
    "HelperPluginManager",
    "HtmlTag",
    "Navigation",
    "NavigationPage",
    "RouteMatch",
    "ServerUrl",
    "Url",
]
