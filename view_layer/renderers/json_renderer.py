"""JSON renderer: flattens view model trees and encodes them as JSON text."""

from collections.abc import Mapping
from typing import Any

from view_layer.exceptions import DomainException
from view_layer.logging_config import get_logger, log_with_context
from view_layer.models.json_model import JsonModel
from view_layer.models.view_model import ViewModel
from view_layer.protocols import ResolverProtocol
from view_layer.serialization import encode_json, flatten_model, normalize_jsonp_callback, to_json_ready, wrap_jsonp

logger = get_logger(__name__)


class JsonRenderer:
    """Render view models, mappings and plain values as JSON.

    Children of a model are nested under their capture key. Children without
    one are dropped, or merged into the parent when
    ``merge_unnamed_children`` is on.
    """

    def __init__(self, merge_unnamed_children: bool = False, jsonp_callback: Any = None):
        self._merge_unnamed_children = bool(merge_unnamed_children)
        self._jsonp_callback = normalize_jsonp_callback(jsonp_callback)
        self._resolver: ResolverProtocol | None = None

    @property
    def engine(self) -> "JsonRenderer":
        return self

    def set_resolver(self, resolver: ResolverProtocol) -> "JsonRenderer":
        """Accepted for interface parity with other renderers; JSON needs no templates."""
        self._resolver = resolver
        return self

    def set_merge_unnamed_children(self, merge: bool) -> "JsonRenderer":
        self._merge_unnamed_children = bool(merge)
        return self

    def can_merge_unnamed_children(self) -> bool:
        return self._merge_unnamed_children

    def set_jsonp_callback(self, callback: Any) -> "JsonRenderer":
        self._jsonp_callback = normalize_jsonp_callback(callback)
        return self

    def has_jsonp_callback(self) -> bool:
        return self._jsonp_callback is not None

    @property
    def jsonp_callback(self) -> str | None:
        return self._jsonp_callback

    def can_render_trees(self) -> bool:
        return True

    def render(self, name_or_model: Any, values: Mapping[str, Any] | None = None) -> str:
        """Render a model or value to JSON text.

        Args:
            name_or_model: ViewModel tree, mapping, sequence, scalar or object
            values: Only meaningful for template renderers; must be empty here
                unless a ViewModel is given

        Returns:
            JSON text, wrapped as ``callback(...);`` when a JSONP callback is set

        Raises:
            DomainException: If a non-model is given together with values
        """
        if isinstance(name_or_model, JsonModel):
            payload = name_or_model.serialize(self.recurse_model(name_or_model))
            if name_or_model.jsonp_callback:
                return payload
            return wrap_jsonp(payload, self._jsonp_callback)

        if isinstance(name_or_model, ViewModel):
            return wrap_jsonp(encode_json(self.recurse_model(name_or_model)), self._jsonp_callback)

        if values:
            log_with_context(
                logger,
                "warning",
                "JSON renderer received values with a non-model argument",
                argument_type=type(name_or_model).__name__,
                value_keys=list(values),
                event_type="renderer_usage_error",
            )
            raise DomainException(
                "JsonRenderer.render: do not know how to handle operation when both "
                "name_or_model and values are populated",
                details={"argument_type": type(name_or_model).__name__},
            )

        return wrap_jsonp(encode_json(to_json_ready(name_or_model)), self._jsonp_callback)

    def recurse_model(self, model: ViewModel) -> dict[str, Any]:
        """Flatten ``model`` and its children into one mapping."""
        return flatten_model(model, self._merge_unnamed_children)
