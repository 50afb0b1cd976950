"""Template resolvers: map template names to template sources."""

from view_layer.resolvers.aggregate import AggregateResolver
from view_layer.resolvers.base import LookupFailure
from view_layer.resolvers.template_map import TemplateMapResolver
from view_layer.resolvers.template_path_stack import TemplatePathStack

__all__ = [
    "AggregateResolver",
    "LookupFailure",
    "TemplateMapResolver",
    "TemplatePathStack",
]
