"""JsonModel: a terminal view model that serializes itself to JSON."""

from collections.abc import Mapping
from typing import Any

from view_layer.models.view_model import ViewModel
from view_layer.serialization import encode_json, normalize_jsonp_callback, to_json_ready, wrap_jsonp


class JsonModel(ViewModel):
    """View model whose variables are the JSON document.

    JSON output does not support layouts, so the model is terminal and is
    not captured into a parent by default.
    """

    DEFAULT_CAPTURE_TO = None
    DEFAULT_TERMINAL = True

    @property
    def jsonp_callback(self) -> str | None:
        return self.get_option("jsonp_callback")

    def set_jsonp_callback(self, callback) -> "JsonModel":
        """Wrap the serialized output in ``callback(...);``; a falsy value disables it."""
        self.set_option("jsonp_callback", normalize_jsonp_callback(callback))
        return self

    def set_pretty_print(self, pretty_print: bool) -> "JsonModel":
        self.set_option("pretty_print", bool(pretty_print))
        return self

    def serialize(self, variables: Mapping[str, Any] | None = None) -> str:
        """Serialize to JSON, wrapped in the JSONP callback if one is set.

        Args:
            variables: Document to encode instead of the model's own variables
                (the renderer passes the variables with children flattened in)
        """
        document = self.variables if variables is None else variables
        payload = encode_json(to_json_ready(document), pretty_print=bool(self.get_option("pretty_print")))
        return wrap_jsonp(payload, self.jsonp_callback)
