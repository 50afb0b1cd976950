"""ConsoleModel: result text plus the error level a console run exits with."""

from typing import Any

from view_layer.models.view_model import ViewModel


class ConsoleModel(ViewModel):
    """Terminal model for console output.

    Console output has no layouts, so the model is never captured into a
    parent container.
    """

    RESULT = "result"
    ERROR_LEVEL = "error_level"

    DEFAULT_CAPTURE_TO = None
    DEFAULT_TERMINAL = True

    def set_error_level(self, error_level: int) -> "ConsoleModel":
        """Set the error level to return after the application ends."""
        self.set_option(self.ERROR_LEVEL, int(error_level))
        return self

    def get_error_level(self) -> int | None:
        return self.get_option(self.ERROR_LEVEL)

    def set_result(self, text: Any) -> "ConsoleModel":
        self.set_variable(self.RESULT, text)
        return self

    def get_result(self) -> Any:
        return self.get_variable(self.RESULT)
