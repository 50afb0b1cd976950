"""ViewModel: a node in the tree of variables handed to a renderer."""

from collections.abc import Iterator, Mapping
from typing import Any

from view_layer.exceptions import InvalidArgumentException


class ViewModel:
    """Variables, options, a template name and an ordered list of child models.

    Children are placed into their parent's output under their ``capture_to``
    key. A falsy capture key means the child is not placed automatically.
    Setter methods return the model so calls can be chained.
    """

    DEFAULT_CAPTURE_TO: str | None = "content"
    DEFAULT_TERMINAL = False

    def __init__(self, variables: Mapping[str, Any] | None = None, options: Mapping[str, Any] | None = None):
        self._variables: dict[str, Any] = {}
        self._options: dict[str, Any] = {}
        self._children: list[ViewModel] = []
        self._template = ""
        self._capture_to: str | None = self.DEFAULT_CAPTURE_TO
        self._terminal = self.DEFAULT_TERMINAL
        self._append = False

        if variables is not None:
            self.set_variables(variables, overwrite=True)
        if options is not None:
            self.set_options(options)

    # Variables

    @property
    def variables(self) -> dict[str, Any]:
        return self._variables

    def set_variable(self, name: str, value: Any) -> "ViewModel":
        self._variables[str(name)] = value
        return self

    def get_variable(self, name: str, default: Any = None) -> Any:
        return self._variables.get(name, default)

    def set_variables(self, variables: Mapping[str, Any], overwrite: bool = False) -> "ViewModel":
        """Set many variables at once.

        Args:
            variables: Mapping of names to values
            overwrite: Replace the whole variable set instead of merging into it

        Raises:
            InvalidArgumentException: If ``variables`` is not a mapping
        """
        if not isinstance(variables, Mapping):
            raise InvalidArgumentException(
                f"ViewModel variables must be a mapping; received {type(variables).__name__}"
            )
        if overwrite:
            # Copy so the caller's dict (or a sibling's) is never shared
            self._variables = dict(variables)
            return self
        self._variables.update(variables)
        return self

    def clear_variables(self) -> "ViewModel":
        self._variables = {}
        return self

    def __getitem__(self, name: str) -> Any:
        return self._variables[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.set_variable(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    # Options

    @property
    def options(self) -> dict[str, Any]:
        return self._options

    def set_option(self, name: str, value: Any) -> "ViewModel":
        self._options[str(name)] = value
        return self

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def set_options(self, options: Mapping[str, Any]) -> "ViewModel":
        if not isinstance(options, Mapping):
            raise InvalidArgumentException(
                f"ViewModel options must be a mapping; received {type(options).__name__}"
            )
        for name, value in options.items():
            self.set_option(name, value)
        return self

    def clear_options(self) -> "ViewModel":
        self._options = {}
        return self

    # Template

    @property
    def template(self) -> str:
        return self._template

    def set_template(self, template: str) -> "ViewModel":
        self._template = str(template)
        return self

    # Children

    @property
    def children(self) -> list["ViewModel"]:
        return self._children

    def add_child(
        self,
        child: "ViewModel",
        capture_to: str | None = None,
        append: bool | None = None,
    ) -> "ViewModel":
        """Append a child model.

        Args:
            child: Model to attach
            capture_to: Override the child's capture key
            append: Override the child's append flag

        Returns:
            This model, for chaining
        """
        if not isinstance(child, ViewModel):
            raise InvalidArgumentException(f"Child must be a ViewModel; received {type(child).__name__}")
        self._children.append(child)
        if capture_to is not None:
            child.set_capture_to(capture_to)
        if append is not None:
            child.set_append(append)
        return self

    def has_children(self) -> bool:
        return bool(self._children)

    def clear_children(self) -> "ViewModel":
        self._children = []
        return self

    def __len__(self) -> int:
        return len(self._children)

    def __bool__(self) -> bool:
        # A model without children is still a model
        return True

    def __iter__(self) -> Iterator["ViewModel"]:
        return iter(self._children)

    # Placement

    @property
    def capture_to(self) -> str | None:
        return self._capture_to

    def set_capture_to(self, capture_to: str | bool | None) -> "ViewModel":
        """Set the key this model is captured under in its parent.

        ``False``, ``None`` and ``""`` all disable automatic placement.
        """
        self._capture_to = str(capture_to) if capture_to else None
        return self

    @property
    def terminal(self) -> bool:
        return self._terminal

    def set_terminal(self, terminal: bool) -> "ViewModel":
        self._terminal = bool(terminal)
        return self

    @property
    def append(self) -> bool:
        return self._append

    def set_append(self, append: bool) -> "ViewModel":
        self._append = bool(append)
        return self

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(template={self._template!r}, capture_to={self._capture_to!r}, "
            f"variables={list(self._variables)!r}, children={len(self._children)})"
        )
