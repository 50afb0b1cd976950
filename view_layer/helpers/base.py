"""Base class for view helpers."""

from typing import Any


class AbstractHelper:
    """A helper bound to the renderer ("view") that exposes it to templates."""

    def __init__(self) -> None:
        self.view: Any = None

    def set_view(self, view: Any) -> "AbstractHelper":
        self.view = view
        return self

    def get_view(self) -> Any:
        return self.view
