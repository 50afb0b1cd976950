"""View models and HTTP response models."""

from view_layer.models.base_models import ErrorDetail, ErrorResponse, HealthResponse
from view_layer.models.console_model import ConsoleModel
from view_layer.models.json_model import JsonModel
from view_layer.models.view_model import ViewModel

__all__ = [
    "ConsoleModel",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "JsonModel",
    "ViewModel",
]
