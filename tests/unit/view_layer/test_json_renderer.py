"""Tests for the JSON renderer."""

import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from view_layer.exceptions import DomainException, InvalidArgumentException
from view_layer.models import JsonModel, ViewModel
from view_layer.renderers import JsonRenderer
from view_layer.serialization import PayloadKind, classify


def dumps(value):
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@pytest.fixture
def renderer():
    return JsonRenderer()


@dataclass
class Point:
    x: int
    y: int


class Plain:
    def __init__(self):
        self.foo = "bar"
        self.bar = "baz"
        self._hidden = "secret"


class Serializable:
    def json_serialize(self):
        return {"serialized": True}


class Status(BaseModel):
    state: str
    code: int


class TestPlainValues:
    """Tests for rendering values that are not view models."""

    @pytest.mark.parametrize(
        "value",
        [
            {"foo": "bar"},
            ["foo", "bar"],
            {"nested": {"list": [1, 2, {"deep": None}]}},
            "text",
            42,
            1.5,
            True,
            None,
        ],
    )
    def test_matches_direct_encoding(self, renderer, value):
        """Test a plain value renders exactly like encoding it directly."""
        assert renderer.render(value) == dumps(value)

    def test_non_ascii_is_kept(self, renderer):
        """Test unicode is emitted as-is."""
        assert renderer.render({"name": "Zoë"}) == '{"name":"Zoë"}'

    def test_plain_object_uses_public_attributes(self, renderer):
        """Test objects render their public attributes only."""
        assert renderer.render(Plain()) == '{"foo":"bar","bar":"baz"}'

    def test_dataclass(self, renderer):
        """Test dataclasses render their fields."""
        assert renderer.render(Point(1, 2)) == '{"x":1,"y":2}'

    def test_self_serializing_object(self, renderer):
        """Test json_serialize() is honoured."""
        assert renderer.render(Serializable()) == '{"serialized":true}'

    def test_pydantic_model(self, renderer):
        """Test pydantic models are dumped."""
        assert renderer.render(Status(state="ok", code=200)) == '{"state":"ok","code":200}'

    def test_nested_objects(self, renderer):
        """Test objects nested inside containers are converted too."""
        assert renderer.render({"point": Point(1, 2), "items": (1, 2)}) == '{"point":{"x":1,"y":2},"items":[1,2]}'

    def test_iterable(self, renderer):
        """Test generators render as arrays."""
        assert renderer.render(n for n in range(3)) == "[0,1,2]"

    def test_unserializable_object_raises(self, renderer):
        """Test objects with nothing to serialize raise TypeError."""
        with pytest.raises(TypeError):
            renderer.render({"value": object()})

    def test_values_with_non_model_raises(self, renderer):
        """Test values only make sense alongside a model."""
        with pytest.raises(DomainException):
            renderer.render("foo", {"bar": "baz"})

    def test_empty_values_with_non_model_is_fine(self, renderer):
        """Test empty values are ignored."""
        assert renderer.render({"foo": "bar"}, {}) == '{"foo":"bar"}'


class TestViewModelTrees:
    """Tests for rendering view model trees."""

    def test_view_model_variables(self, renderer):
        """Test a model renders its variables."""
        assert renderer.render(ViewModel({"foo": "bar"})) == '{"foo":"bar"}'

    def test_captured_child_is_nested(self, renderer):
        """Test children are nested under their capture key."""
        parent = JsonModel({"foo": "bar"})
        parent.add_child(JsonModel({"foo": "bar"}), capture_to="child1")

        assert renderer.render(parent) == '{"foo":"bar","child1":{"foo":"bar"}}'

    def test_uncaptured_children_are_dropped_by_default(self, renderer):
        """Test children without a capture key do not appear."""
        parent = JsonModel({"foo": "bar"})
        parent.add_child(JsonModel({"foo": "child"}))
        parent.add_child(JsonModel({"extra": True}))

        assert not renderer.can_merge_unnamed_children()
        assert renderer.render(parent) == '{"foo":"bar"}'

    def test_uncaptured_children_are_merged_when_enabled(self):
        """Test merged children overwrite parent fields, later children winning."""
        renderer = JsonRenderer(merge_unnamed_children=True)
        parent = JsonModel({"foo": "bar", "keep": 1})
        parent.add_child(JsonModel({"foo": "first", "a": 1}))
        parent.add_child(JsonModel({"foo": "second"}))

        assert renderer.render(parent) == '{"foo":"second","keep":1,"a":1}'

    def test_deep_tree(self, renderer):
        """Test grandchildren are nested recursively."""
        grandchild = ViewModel({"leaf": True})
        child = ViewModel({"branch": True}).add_child(grandchild, capture_to="grandchild")
        root = ViewModel({"root": True}).add_child(child, capture_to="child")

        assert json.loads(renderer.render(root)) == {
            "root": True,
            "child": {"branch": True, "grandchild": {"leaf": True}},
        }

    def test_default_capture_key_is_content(self, renderer):
        """Test a plain ViewModel child is captured as 'content'."""
        root = JsonModel({"foo": "bar"}).add_child(ViewModel({"body": "text"}))

        assert renderer.render(root) == '{"foo":"bar","content":{"body":"text"}}'

    def test_render_does_not_mutate_model(self, renderer):
        """Test rendering leaves the model's own variables untouched."""
        parent = JsonModel({"foo": "bar"})
        parent.add_child(JsonModel({"x": 1}), capture_to="child")

        renderer.render(parent)

        assert parent.variables == {"foo": "bar"}

    def test_model_values_are_ignored(self, renderer):
        """Test values alongside a model do not raise."""
        assert renderer.render(ViewModel({"foo": "bar"}), {"ignored": True}) == '{"foo":"bar"}'

    def test_model_in_variable_keeps_its_children(self, renderer):
        """Test a model stored as a variable is flattened like a child."""
        inner = ViewModel({"a": 1}).add_child(ViewModel({"b": 2}), capture_to="c")
        inner.add_child(JsonModel({"dropped": True}))

        assert renderer.render(JsonModel({"inner": inner})) == '{"inner":{"a":1,"c":{"b":2}}}'

    def test_model_in_variable_follows_merge_setting(self):
        renderer = JsonRenderer(merge_unnamed_children=True)
        inner = ViewModel({"a": 1}).add_child(JsonModel({"merged": True}))

        assert renderer.render(JsonModel({"inner": inner})) == '{"inner":{"a":1,"merged":true}}'

    def test_model_nested_in_plain_value(self, renderer):
        """Test a model inside a list is flattened during encoding."""
        inner = ViewModel({"a": 1}).add_child(ViewModel({"b": 2}), capture_to="c")

        assert renderer.render({"items": [inner]}) == '{"items":[{"a":1,"c":{"b":2}}]}'


class TestJsonp:
    """Tests for JSONP wrapping."""

    def test_renderer_callback_wraps_output(self):
        """Test the renderer callback wraps the JSON text."""
        renderer = JsonRenderer(jsonp_callback="callback")

        assert renderer.has_jsonp_callback()
        assert renderer.render(ViewModel({"foo": "bar"})) == 'callback({"foo":"bar"});'

    def test_renderer_callback_wraps_plain_values(self):
        """Test plain values are wrapped too."""
        renderer = JsonRenderer().set_jsonp_callback("cb")

        assert renderer.render([1, 2]) == "cb([1,2]);"

    @pytest.mark.parametrize("callback", [0, "", None, False])
    def test_falsy_callback_leaves_output_unwrapped(self, callback):
        """Test 0 and '' behave like no callback."""
        renderer = JsonRenderer().set_jsonp_callback(callback)

        assert not renderer.has_jsonp_callback()
        assert renderer.render({"foo": "bar"}) == '{"foo":"bar"}'

    def test_non_string_callback_is_rejected(self):
        """Test a truthy non-string callback is an argument error."""
        with pytest.raises(InvalidArgumentException):
            JsonRenderer().set_jsonp_callback(["cb"])

    def test_model_callback_takes_precedence(self):
        """Test a JsonModel's own callback wins over the renderer's."""
        renderer = JsonRenderer(jsonp_callback="rendererCallback")
        model = JsonModel({"foo": "bar"}).set_jsonp_callback("modelCallback")

        assert renderer.render(model) == 'modelCallback({"foo":"bar"});'

    def test_model_callback_wraps_flattened_tree(self, renderer):
        """Test the callback wraps the whole tree, children included."""
        model = JsonModel({"foo": "bar"}).set_jsonp_callback("cb")
        model.add_child(ViewModel({"x": 1}), capture_to="child")

        assert renderer.render(model) == 'cb({"foo":"bar","child":{"x":1}});'


class TestRendererInterface:
    """Tests for the renderer's collaborator API."""

    def test_engine_is_renderer(self, renderer):
        assert renderer.engine is renderer

    def test_can_render_trees(self, renderer):
        assert renderer.can_render_trees() is True

    def test_set_resolver_is_accepted(self, renderer, stub_resolver_factory):
        assert renderer.set_resolver(stub_resolver_factory()) is renderer


class TestClassify:
    """Tests for payload classification."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ("text", PayloadKind.SCALAR),
            (None, PayloadKind.SCALAR),
            ([1], PayloadKind.SEQUENCE),
            ((1,), PayloadKind.SEQUENCE),
            ({"a": 1}, PayloadKind.MAPPING),
            (ViewModel(), PayloadKind.VIEW_MODEL),
            (Serializable(), PayloadKind.SELF_SERIALIZING),
            (Status(state="ok", code=1), PayloadKind.SELF_SERIALIZING),
            ({1, 2}, PayloadKind.ITERABLE),
            (Plain(), PayloadKind.OBJECT),
        ],
    )
    def test_classify(self, value, kind):
        """Test each payload shape maps to one kind."""
        assert classify(value) is kind
