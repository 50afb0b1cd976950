"""Protocol definitions for the collaborators the view layer talks to."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResolverProtocol(Protocol):
    """Maps a template name to a template source.

    A miss is reported by returning None (any falsy value counts as a miss
    inside an aggregate).
    """

    def resolve(self, name: str) -> Any: ...


@runtime_checkable
class JsonSerializable(Protocol):
    """An object that knows its own JSON-ready representation."""

    def json_serialize(self) -> Any: ...


class RouterProtocol(Protocol):
    """Anything that can assemble a path for a named route (e.g. a Starlette router)."""

    def url_path_for(self, name: str, /, **path_params: Any) -> Any: ...


class AclProtocol(Protocol):
    """Access control list queried by navigation helpers."""

    def is_allowed(self, role: Any = None, resource: Any = None, privilege: Any = None) -> bool: ...
