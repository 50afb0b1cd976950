"""JSON encoding of arbitrary payloads handed to the JSON renderer.

Every non-model payload is classified into one :class:`PayloadKind` and
converted to a JSON-ready value by :func:`to_json_ready`.
"""

import dataclasses
import json
from collections.abc import Iterable, Mapping
from enum import Enum, auto
from typing import Any

from pydantic import BaseModel

from view_layer.exceptions import InvalidArgumentException
from view_layer.protocols import JsonSerializable

SCALAR_TYPES = (str, int, float, bool, type(None))


class PayloadKind(Enum):
    """Shapes a renderable value can take."""

    SCALAR = auto()  # str, int, float, bool, None
    SEQUENCE = auto()  # list, tuple
    MAPPING = auto()  # dict or any Mapping
    VIEW_MODEL = auto()  # ViewModel trees, see flatten_model()
    SELF_SERIALIZING = auto()  # json_serialize() or pydantic models
    ITERABLE = auto()  # sets, generators, other iterables
    OBJECT = auto()  # plain objects and dataclasses


def classify(value: Any) -> PayloadKind:
    """Return the kind of ``value``.

    Order matters: view models are checked before the mapping/iterable
    checks since they iterate over their children.
    """
    from view_layer.models.view_model import ViewModel

    if isinstance(value, SCALAR_TYPES):
        return PayloadKind.SCALAR
    if isinstance(value, ViewModel):
        return PayloadKind.VIEW_MODEL
    if isinstance(value, (JsonSerializable, BaseModel)):
        return PayloadKind.SELF_SERIALIZING
    if isinstance(value, (list, tuple)):
        return PayloadKind.SEQUENCE
    if isinstance(value, Mapping):
        return PayloadKind.MAPPING
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return PayloadKind.ITERABLE
    return PayloadKind.OBJECT


def public_fields(value: Any) -> dict[str, Any]:
    """Public attributes of a plain object (or the fields of a dataclass)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value) if not f.name.startswith("_")}
    try:
        attributes = vars(value)
    except TypeError:
        return {}
    return {name: attr for name, attr in attributes.items() if not name.startswith("_")}


def flatten_model(model: Any, merge_unnamed_children: bool = False) -> dict[str, Any]:
    """Flatten a view model tree into one mapping.

    Captured children land under their capture key. Uncaptured children
    are merged into the parent when ``merge_unnamed_children`` is set and
    dropped otherwise. Models stored as variable values are flattened too.
    """
    values = {
        name: flatten_model(value, merge_unnamed_children) if classify(value) is PayloadKind.VIEW_MODEL else value
        for name, value in model.variables.items()
    }

    for child in model:
        capture_to = child.capture_to
        if capture_to:
            values[capture_to] = flatten_model(child, merge_unnamed_children)
        elif merge_unnamed_children:
            values.update(flatten_model(child, merge_unnamed_children))

    return values


def to_json_ready(value: Any) -> Any:
    """Convert the top level of ``value`` to something ``json.dumps`` accepts.

    Nested values are handled by :func:`_default` during encoding.
    """
    kind = classify(value)
    if kind is PayloadKind.SCALAR or kind is PayloadKind.SEQUENCE:
        return value
    if kind is PayloadKind.MAPPING:
        return dict(value)
    if kind is PayloadKind.SELF_SERIALIZING:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json")
        return value.json_serialize()
    if kind is PayloadKind.ITERABLE:
        return list(value)
    if kind is PayloadKind.VIEW_MODEL:
        return flatten_model(value)
    return public_fields(value)


def _default(value: Any) -> Any:
    kind = classify(value)
    if kind is PayloadKind.OBJECT and not public_fields(value):
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
    return to_json_ready(value)


def encode_json(value: Any, pretty_print: bool = False) -> str:
    """Encode ``value`` as compact JSON text (indented when ``pretty_print``)."""
    if pretty_print:
        return json.dumps(value, default=_default, ensure_ascii=False, indent=4)
    return json.dumps(value, default=_default, ensure_ascii=False, separators=(",", ":"))


def normalize_jsonp_callback(callback: Any) -> str | None:
    """Validate a JSONP callback name.

    Any falsy value (None, "", 0, False) disables wrapping.

    Raises:
        InvalidArgumentException: If a truthy non-string is given
    """
    if not callback:
        return None
    if not isinstance(callback, str):
        raise InvalidArgumentException(
            f"JSONP callback must be a string; received {type(callback).__name__}",
            details={"callback": repr(callback)},
        )
    callback = callback.strip()
    return callback or None


def wrap_jsonp(payload: str, callback: str | None) -> str:
    if not callback:
        return payload
    return f"{callback}({payload});"
