"""
Tests for layer list extraction and slots.
"""

import logging

from latestlayer.core.extractor import (
    Slot,
    collect_slots,
    function_layer_associations,
    function_layer_lists,
    template_layer_associations,
    template_layer_lists,
)


def _template():
    return {
        "Resources": {
            "HelloLambdaFunction": {
                "Type": "AWS::Lambda::Function",
                "Properties": {"Layers": ["a", "b"]},
            },
            "NoLayersLambdaFunction": {
                "Type": "AWS::Lambda::Function",
                "Properties": {"Handler": "handler.main"},
            },
            "NoPropertiesLambdaFunction": {"Type": "AWS::Lambda::Function"},
            "Bucket": {
                "Type": "AWS::S3::Bucket",
                "Properties": {"Layers": ["should-not-appear"]},
            },
        }
    }


class TestSlot:
    """Tests for Slot."""

    def test_value_and_write(self):
        layers = ["a", "b"]
        slot = Slot(layers, 1)
        assert slot.value == "b"
        slot.write("c")
        assert layers == ["a", "c"]

    def test_slots_compare_by_identity(self):
        layers = ["a"]
        assert Slot(layers, 0) != Slot(layers, 0)


class TestTemplateLayerLists:
    """Tests for template_layer_lists."""

    def test_only_lambda_functions_with_layers(self):
        template = _template()
        lists = list(template_layer_lists(template))
        assert lists == [["a", "b"]]
        assert lists[0] is template["Resources"]["HelloLambdaFunction"]["Properties"]["Layers"]

    def test_missing_resources(self):
        assert list(template_layer_lists({})) == []
        assert list(template_layer_lists(None)) == []
        assert list(template_layer_lists({"Resources": None})) == []

    def test_non_mapping_properties_are_skipped(self):
        template = {"Resources": {"F": {"Type": "AWS::Lambda::Function", "Properties": "x"}}}
        assert list(template_layer_lists(template)) == []

    def test_non_mapping_resources_are_skipped(self):
        assert list(template_layer_lists({"Resources": ["F"]})) == []

    def test_associations_name_the_resource(self):
        template = _template()
        assert list(template_layer_associations(template)) == [
            ("HelloLambdaFunction.Properties.Layers", ["a", "b"])
        ]


class TestFunctionLayerLists:
    """Tests for function_layer_lists."""

    def test_yields_layers_of_each_function(self):
        functions = {
            "hello": {"handler": "h.main", "layers": ["x"]},
            "world": {"handler": "w.main"},
            "other": {"layers": ["y", "z"]},
        }
        assert list(function_layer_lists(functions)) == [["x"], ["y", "z"]]

    def test_missing_or_empty_functions(self):
        assert list(function_layer_lists(None)) == []
        assert list(function_layer_lists({})) == []

    def test_null_function_entry_is_skipped(self):
        assert list(function_layer_lists({"hello": None})) == []

    def test_null_layers_is_skipped(self):
        assert list(function_layer_lists({"hello": {"layers": None}})) == []

    def test_associations_name_the_function(self):
        functions = {"hello": {"layers": ["x"]}, "world": {"layers": "oops"}}
        assert list(function_layer_associations(functions)) == [
            ("hello.layers", ["x"]),
            ("world.layers", "oops"),
        ]


class TestCollectSlots:
    """Tests for collect_slots."""

    def test_slots_in_discovery_order(self):
        first, second = ["a", "b"], ["c"]
        slots = collect_slots([first, second])
        assert [s.value for s in slots] == ["a", "b", "c"]
        assert slots[2].container is second

    def test_non_list_is_skipped(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="latestlayer"):
            slots = collect_slots(["not-a-list", {"Ref": "x"}, ["a"]])
        assert [s.value for s in slots] == ["a"]
        assert "not a list" in caplog.text

    def test_writes_reach_owning_tree(self):
        template = _template()
        slots = collect_slots(template_layer_lists(template))
        slots[0].write("resolved")
        assert template["Resources"]["HelloLambdaFunction"]["Properties"]["Layers"] == ["resolved", "b"]
