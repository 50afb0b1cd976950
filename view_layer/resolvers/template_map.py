"""Exact-match template name to template source table."""

from collections.abc import Iterator, Mapping
from typing import Any

from view_layer.exceptions import InvalidArgumentException


class TemplateMapResolver:
    """Resolve template names through a plain lookup table.

    Values are opaque to the resolver: usually a file path, but inline
    template source works too.
    """

    def __init__(self, template_map: Mapping[str, Any] | None = None):
        self._map: dict[str, Any] = {}
        if template_map is not None:
            self.set_map(template_map)

    @staticmethod
    def _ensure_mapping(template_map: Any) -> Mapping[str, Any]:
        if not isinstance(template_map, Mapping):
            raise InvalidArgumentException(
                f"Template map must be a mapping; received {type(template_map).__name__}"
            )
        return template_map

    def set_map(self, template_map: Mapping[str, Any]) -> "TemplateMapResolver":
        """Replace the whole map."""
        self._map = dict(self._ensure_mapping(template_map))
        return self

    def merge(self, template_map: Mapping[str, Any]) -> "TemplateMapResolver":
        """Add entries, overwriting existing names."""
        self._map.update(self._ensure_mapping(template_map))
        return self

    def add(self, name: str | Mapping[str, Any], source: Any = None) -> "TemplateMapResolver":
        """Add a single entry.

        A mapping passed as ``name`` is merged. A ``None`` source removes the
        entry for ``name``.
        """
        if isinstance(name, Mapping):
            return self.merge(name)
        if not isinstance(name, str):
            raise InvalidArgumentException(f"Template name must be a string; received {type(name).__name__}")
        if source is None:
            self._map.pop(name, None)
            return self
        self._map[name] = source
        return self

    def has(self, name: str) -> bool:
        return name in self._map

    def get(self, name: str) -> Any:
        return self._map.get(name)

    @property
    def map(self) -> dict[str, Any]:
        return dict(self._map)

    def resolve(self, name: str) -> Any:
        return self._map.get(name)

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._map.items())
