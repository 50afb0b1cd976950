"""Tests for the Jinja2 HTML renderer."""

import pytest
from markupsafe import Markup

from view_layer.exceptions import DomainException, InvalidArgumentException, TemplateNotFoundException
from view_layer.helpers import HelperPluginManager
from view_layer.models import ViewModel
from view_layer.renderers import HtmlRenderer
from view_layer.resolvers import AggregateResolver, LookupFailure, TemplateMapResolver, TemplatePathStack


@pytest.fixture
def inline_renderer():
    """Renderer whose templates are inline sources in a template map."""
    resolver = AggregateResolver().attach(
        TemplateMapResolver(
            {
                "layout": "<main>{{ content }}</main>",
                "page": "<h1>{{ title }}</h1>",
                "sidebar": "<aside>{{ text }}</aside>",
                "escaped": "{{ value }}",
                "helpers": "{{ doctype() }}{{ escape_html(value) }}",
                "plugin": "{{ plugin('escapeHtml')(value) }}",
            }
        )
    )
    return HtmlRenderer(resolver)


class TestRenderByName:
    """Tests for rendering a template name."""

    def test_render_name_with_values(self, inline_renderer):
        """Test a template name renders with the given values."""
        assert inline_renderer.render("page", {"title": "Hello"}) == "<h1>Hello</h1>"

    def test_output_is_markup(self, inline_renderer):
        """Test rendered output is safe markup."""
        assert isinstance(inline_renderer.render("page", {"title": "x"}), Markup)

    def test_autoescape(self, inline_renderer):
        """Test variables are escaped."""
        assert inline_renderer.render("escaped", {"value": "<b>"}) == "&lt;b&gt;"

    def test_unknown_template_raises(self, inline_renderer):
        """Test an unresolvable name raises with the resolver's reason."""
        with pytest.raises(TemplateNotFoundException) as exc_info:
            inline_renderer.render("missing")

        assert exc_info.value.details["template"] == "missing"
        assert exc_info.value.details["reason"] == LookupFailure.NOT_FOUND.value

    def test_no_resolver_raises(self):
        """Test rendering without a resolver raises TemplateNotFoundException."""
        with pytest.raises(TemplateNotFoundException):
            HtmlRenderer().render("page")


class TestRenderModel:
    """Tests for rendering view model trees."""

    def test_model_requires_template(self, inline_renderer):
        """Test a model without a template is a usage error."""
        with pytest.raises(DomainException):
            inline_renderer.render(ViewModel({"title": "x"}))

    def test_model_variables(self, inline_renderer):
        """Test the model's variables reach the template."""
        model = ViewModel({"title": "Hello"}).set_template("page")

        assert inline_renderer.render(model) == "<h1>Hello</h1>"

    def test_values_override_model_variables(self, inline_renderer):
        """Test explicit values are merged over model variables."""
        model = ViewModel({"title": "Model"}).set_template("page")

        assert inline_renderer.render(model, {"title": "Values"}) == "<h1>Values</h1>"

    def test_captured_child_is_rendered_into_parent(self, inline_renderer):
        """Test a child captured as 'content' is rendered unescaped into the layout."""
        layout = ViewModel().set_template("layout")
        layout.add_child(ViewModel({"title": "Hello"}).set_template("page"))

        assert inline_renderer.render(layout) == "<main><h1>Hello</h1></main>"

    def test_appended_children_accumulate(self, inline_renderer):
        """Test children with append set add to the same capture key."""
        layout = ViewModel().set_template("layout")
        layout.add_child(ViewModel({"title": "One"}).set_template("page"))
        layout.add_child(ViewModel({"title": "Two"}).set_template("page"), append=True)

        assert inline_renderer.render(layout) == "<main><h1>One</h1><h1>Two</h1></main>"

    def test_later_child_replaces_without_append(self, inline_renderer):
        """Test a second child under the same key replaces the first."""
        layout = ViewModel().set_template("layout")
        layout.add_child(ViewModel({"title": "One"}).set_template("page"))
        layout.add_child(ViewModel({"title": "Two"}).set_template("page"))

        assert inline_renderer.render(layout) == "<main><h1>Two</h1></main>"

    def test_uncaptured_children_are_skipped(self, inline_renderer):
        """Test children without a capture key are not rendered."""
        layout = ViewModel({"content": "plain"}).set_template("layout")
        layout.add_child(ViewModel().set_template("missing").set_capture_to(None))

        assert inline_renderer.render(layout) == "<main>plain</main>"


class TestFilesystemTemplates:
    """Tests for templates resolved to files."""

    def test_renders_file_from_path_stack(self, template_dirs):
        """Test a resolved file path is read from disk."""
        library, app = template_dirs
        renderer = HtmlRenderer(AggregateResolver().attach(TemplatePathStack([library, app])))

        assert renderer.render("layout", {"content": "x"}) == "<main>x</main>"
        assert renderer.render("partials/item", {"name": "a"}) == "<li>a</li>"

    def test_template_map_overrides_path_stack(self, template_dirs):
        """Test the higher priority map wins over the path stack."""
        library, app = template_dirs
        resolver = (
            AggregateResolver()
            .attach(TemplatePathStack([library, app]), 1)
            .attach(TemplateMapResolver({"layout": str(library / "layout.html")}), 10)
        )
        renderer = HtmlRenderer(resolver)

        assert renderer.render("layout", {"content": "x"}) == "<main>library x</main>"

    def test_traversal_is_reported(self, template_dirs):
        """Test a rejected name surfaces as not found with INVALID_RESOLVER."""
        renderer = HtmlRenderer(AggregateResolver().attach(TemplatePathStack(template_dirs)))

        with pytest.raises(TemplateNotFoundException) as exc_info:
            renderer.render("../secret")

        assert exc_info.value.details["reason"] == LookupFailure.INVALID_RESOLVER.value

    def test_set_resolver_replaces_templates(self, inline_renderer):
        """Test swapping the resolver drops cached templates."""
        inline_renderer.render("page", {"title": "x"})

        inline_renderer.set_resolver(TemplateMapResolver({"page": "<h2>{{ title }}</h2>"}))

        assert inline_renderer.render("page", {"title": "x"}) == "<h2>x</h2>"

    def test_attached_resolver_takes_over_cached_name(self):
        """Test a higher priority resolver attached after a render is used."""
        resolver = AggregateResolver().attach(TemplateMapResolver({"page": "old {{ x }}"}))
        renderer = HtmlRenderer(resolver)
        assert renderer.render("page", {"x": 1}) == "old 1"

        resolver.attach(TemplateMapResolver({"page": "new {{ x }}"}), 100)

        assert renderer.render("page", {"x": 1}) == "new 1"

    def test_map_edit_is_picked_up(self):
        """Test changing a map entry after a render replaces the template."""
        template_map = TemplateMapResolver({"page": "old {{ x }}"})
        renderer = HtmlRenderer(AggregateResolver().attach(template_map))
        renderer.render("page", {"x": 1})

        template_map.add("page", "added {{ x }}")
        assert renderer.render("page", {"x": 1}) == "added 1"

        template_map.merge({"page": "merged {{ x }}"})
        assert renderer.render("page", {"x": 1}) == "merged 1"

    def test_file_template_replaced_by_new_mapping(self, template_dirs):
        """Test a cached file template follows the resolver to another file."""
        library, app = template_dirs
        template_map = TemplateMapResolver()
        resolver = AggregateResolver().attach(TemplatePathStack([library, app]), 1).attach(template_map, 10)
        renderer = HtmlRenderer(resolver)
        assert renderer.render("layout", {"content": "x"}) == "<main>x</main>"

        template_map.add("layout", str(library / "layout.html"))

        assert renderer.render("layout", {"content": "x"}) == "<main>library x</main>"


class TestHelpers:
    """Tests for helpers exposed to templates."""

    def test_helpers_are_globals(self, inline_renderer):
        """Test helpers are callable from templates by name."""
        assert inline_renderer.render("helpers", {"value": "<b>"}) == "<!DOCTYPE html>&lt;b&gt;"

    def test_plugin_lookup_from_template(self, inline_renderer):
        """Test templates can fetch helpers with plugin(name)."""
        assert inline_renderer.render("plugin", {"value": "&"}) == "&amp;"

    def test_plugin_is_shared_and_bound(self, inline_renderer):
        """Test plugin() returns one instance bound to the renderer."""
        helper = inline_renderer.plugin("html_tag")

        assert helper is inline_renderer.plugin("htmlTag")
        assert helper.view is inline_renderer

    def test_unknown_plugin_raises(self, inline_renderer):
        """Test unknown helper names raise."""
        with pytest.raises(InvalidArgumentException):
            inline_renderer.plugin("nope")

    def test_custom_helper_manager(self):
        """Test helpers registered on a custom manager become globals."""
        helpers = HelperPluginManager().register("shout", lambda: (lambda text: text.upper()))
        renderer = HtmlRenderer(TemplateMapResolver({"t": "{{ shout('hi') }}"}), helpers=helpers)

        assert renderer.render("t") == "HI"

    def test_can_render_trees(self, inline_renderer):
        assert inline_renderer.can_render_trees()
