"""Doctype helper: tracks the document type templates are rendered for."""

from markupsafe import Markup

from view_layer.exceptions import DomainException
from view_layer.helpers.base import AbstractHelper

HTML5 = "HTML5"
XHTML11 = "XHTML11"
XHTML1_STRICT = "XHTML1_STRICT"
XHTML1_TRANSITIONAL = "XHTML1_TRANSITIONAL"
XHTML5 = "XHTML5"
HTML4_STRICT = "HTML4_STRICT"
HTML4_LOOSE = "HTML4_LOOSE"
CUSTOM_XHTML = "CUSTOM_XHTML"
CUSTOM = "CUSTOM"

DOCTYPES = {
    HTML5: "<!DOCTYPE html>",
    XHTML11: '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">',
    XHTML1_STRICT: (
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">'
    ),
    XHTML1_TRANSITIONAL: (
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">'
    ),
    XHTML5: "<!DOCTYPE html>",
    HTML4_STRICT: '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN" "http://www.w3.org/TR/html4/strict.dtd">',
    HTML4_LOOSE: (
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN" '
        '"http://www.w3.org/TR/html4/loose.dtd">'
    ),
}


class Doctype(AbstractHelper):
    """Select and print the document type declaration."""

    def __init__(self, doctype: str = HTML5):
        super().__init__()
        self._registry = dict(DOCTYPES)
        self._doctype = doctype

    def __call__(self, doctype: str | None = None) -> "Doctype":
        """Select a known doctype or register a custom declaration.

        Raises:
            DomainException: If a custom declaration does not start with ``<!DOCTYPE``
        """
        if doctype is None:
            return self
        if doctype in self._registry:
            self._doctype = doctype
            return self
        if not doctype.startswith("<!DOCTYPE"):
            raise DomainException("The specified doctype is malformed", details={"doctype": doctype})
        name = CUSTOM_XHTML if "xhtml" in doctype.lower() else CUSTOM
        self._registry[name] = doctype
        self._doctype = name
        return self

    def set_doctype(self, doctype: str) -> "Doctype":
        self._doctype = doctype
        return self

    @property
    def doctype(self) -> str:
        return self._doctype

    def is_xhtml(self) -> bool:
        return "xhtml" in self._doctype.lower()

    def is_html5(self) -> bool:
        return "<!DOCTYPE html>" == self._registry.get(self._doctype)

    def __str__(self) -> str:
        return self._registry.get(self._doctype, "")

    def __html__(self) -> Markup:
        return Markup(str(self))
