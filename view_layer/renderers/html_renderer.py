"""HTML renderer: Jinja2 templates located through a template resolver."""

import os
from collections.abc import Callable, Mapping
from typing import Any

from jinja2 import BaseLoader, Environment, TemplateNotFound
from markupsafe import Markup

from view_layer.exceptions import DomainException, TemplateNotFoundException
from view_layer.helpers.plugin_manager import HelperPluginManager
from view_layer.logging_config import get_logger, log_with_context
from view_layer.models.view_model import ViewModel
from view_layer.protocols import ResolverProtocol
from view_layer.resolvers.base import LookupFailure

logger = get_logger(__name__)


class ResolverLoader(BaseLoader):
    """Jinja2 loader that asks a template resolver for the source.

    A resolved value naming an existing file is read from disk; any other
    value is used as the template source itself.
    """

    def __init__(self, resolver: ResolverProtocol | None = None):
        self.resolver = resolver

    def get_source(self, environment: Environment, template: str) -> tuple[str, str | None, Callable[[], bool]]:
        resolver = self.resolver
        if resolver is None:
            raise TemplateNotFound(template)

        resolved = resolver.resolve(template)
        if not resolved:
            raise TemplateNotFound(template)

        def same_resolution() -> bool:
            # Attaching a resolver or editing a map can change what a name points to
            return self.resolver is resolver and resolver.resolve(template) == resolved

        filename = os.fspath(resolved) if isinstance(resolved, (str, os.PathLike)) else None
        if filename is not None and os.path.isfile(filename):
            with open(filename, encoding="utf-8") as f:
                source = f.read()
            mtime = os.path.getmtime(filename)

            def uptodate() -> bool:
                try:
                    return os.path.getmtime(filename) == mtime and same_resolution()
                except OSError:
                    return False

            return source, filename, uptodate

        return str(resolved), None, same_resolution


class HtmlRenderer:
    """Render view model trees to HTML with Jinja2.

    Children with a capture key are rendered first and handed to the parent
    template as markup under that key. Every registered helper is a Jinja2
    global, so templates call ``url('home')`` or ``html_tag.open_tag()``.
    """

    def __init__(
        self,
        resolver: ResolverProtocol | None = None,
        helpers: HelperPluginManager | None = None,
        auto_reload: bool = True,
    ):
        self._loader = ResolverLoader(resolver)
        self.helpers = helpers if helpers is not None else HelperPluginManager()
        self.helpers.view = self
        self.engine = Environment(
            loader=self._loader,
            autoescape=True,
            auto_reload=auto_reload,
        )
        for name in self.helpers.names():
            self.engine.globals[name] = self.helpers.get(name)
        self.engine.globals["plugin"] = self.plugin

    @property
    def resolver(self) -> ResolverProtocol | None:
        return self._loader.resolver

    def set_resolver(self, resolver: ResolverProtocol) -> "HtmlRenderer":
        self._loader.resolver = resolver
        if self.engine.cache is not None:
            self.engine.cache.clear()
        return self

    def plugin(self, name: str) -> Any:
        return self.helpers.get(name)

    def can_render_trees(self) -> bool:
        return True

    def render(self, name_or_model: str | ViewModel, values: Mapping[str, Any] | None = None) -> Markup:
        """Render a template name or a view model tree.

        Args:
            name_or_model: Template name, or a ViewModel with a template set
            values: Variables merged over the model's own

        Raises:
            DomainException: If a ViewModel has no template
            TemplateNotFoundException: If the resolver cannot find the template
        """
        if isinstance(name_or_model, ViewModel):
            model = name_or_model
            if not model.template:
                raise DomainException(
                    "HtmlRenderer.render: received a ViewModel with no template",
                    details={"model": repr(model)},
                )
            template_name = model.template
            variables = dict(model.variables)
            for child in model:
                if not child.capture_to:
                    continue
                rendered = self.render(child)
                if child.append and child.capture_to in variables:
                    rendered = Markup(variables[child.capture_to]) + rendered
                variables[child.capture_to] = rendered
        else:
            template_name = str(name_or_model)
            variables = {}

        if values:
            variables.update(values)

        return Markup(self._render_template(template_name, variables))

    def _render_template(self, template_name: str, variables: dict[str, Any]) -> str:
        try:
            template = self.engine.get_template(template_name)
        except TemplateNotFound as e:
            reason = getattr(self.resolver, "last_lookup_failure", LookupFailure.NOT_FOUND)
            log_with_context(
                logger,
                "warning",
                "Template could not be resolved",
                template=template_name,
                missing=e.name,
                reason=getattr(reason, "value", str(reason)),
                event_type="template_not_found",
            )
            raise TemplateNotFoundException(e.name or template_name, reason=getattr(reason, "value", None)) from e
        return template.render(variables)
