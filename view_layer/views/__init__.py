"""Response wrappers for rendered views."""

from view_layer.views.view_response import ViewResponse

__all__ = ["ViewResponse"]
