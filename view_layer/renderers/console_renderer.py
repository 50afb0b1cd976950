"""Console renderer: collects result text from console models."""

from collections.abc import Mapping
from typing import Any

from view_layer.exceptions import DomainException
from view_layer.logging_config import get_logger, log_with_context
from view_layer.models.console_model import ConsoleModel
from view_layer.models.view_model import ViewModel

logger = get_logger(__name__)


class ConsoleRenderer:
    """Render console models to a single result string.

    Children are rendered depth-first in attach order and their output
    precedes the parent's own result.
    """

    def can_render_trees(self) -> bool:
        return True

    def render(self, name_or_model: Any, values: Mapping[str, Any] | None = None) -> str:
        if isinstance(name_or_model, ViewModel):
            output = "".join(self.render(child) for child in name_or_model)
            result = name_or_model.get_variable(ConsoleModel.RESULT)
            if result is not None:
                output += str(result)
            return output

        if values:
            log_with_context(
                logger,
                "warning",
                "Console renderer received values with a non-model argument",
                argument_type=type(name_or_model).__name__,
                value_keys=list(values),
                event_type="renderer_usage_error",
            )
            raise DomainException(
                "ConsoleRenderer.render: do not know how to handle operation when both "
                "name_or_model and values are populated",
                details={"argument_type": type(name_or_model).__name__},
            )

        return "" if name_or_model is None else str(name_or_model)

    def exit_code(self, model: ViewModel) -> int:
        """Error level to exit the process with (0 when the model sets none)."""
        return int(model.get_option(ConsoleModel.ERROR_LEVEL) or 0)
