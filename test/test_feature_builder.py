"""Tests for the feature tree builder over hand-built syntax trees."""

import dataclasses
import json

import pytest

from syntax.node import Node, NodeKind, Location, const
from features.base import ClassFeature, MethodFeature, Visibility, features_to_dicts, iter_methods
from extract.builder import FeatureTreeBuilder, extract_features, is_singleton_scoped
from test_utils import klass, module, sclass, defn, defs, send, begin, self_node

PATH = "lib/main.rb"


def _methods(result):
    return list(iter_methods(result.features))


class TestTreeShape:
    def test_declaration_order_is_preserved(self):
        root = klass("Main", defn("zeta", line=2), defn("alpha", line=3), defn("mid", line=4))
        result = extract_features(root, PATH)

        assert len(result.features) == 1
        main = result.features[0]
        assert [c.name for c in main.children] == ["zeta", "alpha", "mid"]
        assert [c.location for c in main.children] == [f"{PATH}:2", f"{PATH}:3", f"{PATH}:4"]

    def test_sibling_classes_keep_order_and_duplicates(self):
        root = begin(klass("B", line=1), klass("A", line=3), klass("B", line=5))
        result = extract_features(root, PATH)
        assert [f.name for f in result.features] == ["B", "A", "B"]

    def test_nested_types(self):
        root = module("A", klass("B", defn("run", line=3), line=2), line=1)
        result = extract_features(root, PATH)

        a = result.features[0]
        assert isinstance(a, ClassFeature)
        assert a.name == "A"
        b = a.children[0]
        assert b.name == "B"
        assert b.location == f"{PATH}:2"
        run = b.children[0]
        assert isinstance(run, MethodFeature)
        assert run.class_name == "A::B"
        assert run.static is False

    def test_compound_class_name(self):
        root = klass("A::B", defn("run"))
        result = extract_features(root, PATH)
        assert result.features[0].name == "B"
        assert result.features[0].children[0].class_name == "A::B"

    def test_top_level_method_attaches_to_root(self):
        root = begin(defn("helper", line=1), klass("Main", line=3))
        result = extract_features(root, PATH)

        helper = result.features[0]
        assert isinstance(helper, MethodFeature)
        assert helper.class_name == ""
        assert result.features[1].name == "Main"

    def test_declarations_in_method_bodies_attach_to_enclosing_type(self):
        outer = defn("outer", line=2, body=begin(defn("inner", line=3), klass("Local", line=4)))
        result = extract_features(klass("Main", outer), PATH)

        children = result.features[0].children
        assert [c.name for c in children] == ["outer", "inner", "Local"]
        assert children[1].class_name == "Main"

    def test_features_are_immutable(self):
        result = extract_features(klass("Main", defn("run")), PATH)
        assert isinstance(result.features, tuple)
        assert isinstance(result.features[0].children, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.features[0].name = "Other"


class TestStaticMethods:
    def test_singleton_block_method_is_static_with_enclosing_name(self):
        root = klass("Main", sclass(defn("sclass_function")), defn("instance_function"))
        methods = _methods(extract_features(root, PATH))

        assert [(m.name, m.static, m.class_name) for m in methods] == [
            ("sclass_function", True, "Main"),
            ("instance_function", False, "Main"),
        ]

    def test_singleton_block_does_not_produce_a_feature(self):
        root = klass("Main", sclass(defn("a"), defn("b")))
        main = extract_features(root, PATH).features[0]
        assert all(isinstance(c, MethodFeature) for c in main.children)
        assert [c.name for c in main.children] == ["a", "b"]
        assert all(c.static for c in main.children)

    def test_one_grouping_level_inside_singleton_block(self):
        root = klass("Main", sclass(begin(send("attr_reader"), defn("x"))))
        [x] = _methods(extract_features(root, PATH))
        assert x.static is True

    def test_deeper_nesting_inside_singleton_block_is_not_static(self):
        """Only one transparent grouping level is accepted."""
        kwbegin = Node(NodeKind.KWBEGIN, (defn("x"),), Location(4))
        root = klass("Main", sclass(begin(send("foo"), kwbegin)))
        [x] = _methods(extract_features(root, PATH))
        assert x.static is False

    def test_def_self(self):
        root = klass("Main", defs(self_node(), "build"))
        [build] = _methods(extract_features(root, PATH))
        assert build.static is True
        assert build.class_name == "Main"

    def test_explicit_receiver_retargets_class_name(self):
        root = module("M", klass("Outer", defs(const("Other"), "build"), defn("run")))
        build, run = _methods(extract_features(root, PATH))

        assert build.class_name == "M::Other"
        assert build.static is True
        assert run.class_name == "M::Outer"

    def test_explicit_receiver_matching_enclosing_class(self):
        root = klass("Main", defs(const("Main"), "main_func"))
        [func] = _methods(extract_features(root, PATH))
        assert func.class_name == "Main"

    def test_is_singleton_scoped(self):
        block = sclass()
        assert is_singleton_scoped((klass("Main"), block))
        assert is_singleton_scoped((block, begin()))
        assert not is_singleton_scoped((klass("Main"),))
        assert not is_singleton_scoped((begin(),))
        assert not is_singleton_scoped(())


class TestVisibility:
    def test_visibility_reaches_features(self):
        root = klass("Main", defn("a"), send("protected"), defn("b"), send("private"), defn("c"))
        a, b, c = _methods(extract_features(root, PATH))
        assert a.visibility == Visibility.PUBLIC
        assert b.visibility == Visibility.PROTECTED
        assert c.visibility == Visibility.PRIVATE

    def test_classes_are_public(self):
        root = klass("Main", send("private"), klass("Inner"))
        inner = extract_features(root, PATH).features[0].children[0]
        assert inner.visibility == Visibility.PUBLIC


class TestDiagnostics:
    def test_unsupported_receiver_is_skipped_and_recorded(self):
        bad = Node(NodeKind.DEFS, (send("obj"), "x", None, klass("Inner", line=4)), Location(3))
        root = klass("Main", defn("a", line=2), bad, defn("b", line=6))
        result = extract_features(root, PATH)

        names = [c.name for c in result.features[0].children]
        assert names == ["a", "Inner", "b"]
        [diag] = result.diagnostics
        assert diag.kind == "UnsupportedReceiverKind"
        assert diag.location == f"{PATH}:3"

    def test_malformed_class_skips_subtree(self):
        bad = Node(NodeKind.CLASS, (None, None, defn("hidden")), Location(2))
        root = begin(bad, klass("Ok", line=5))
        result = extract_features(root, PATH)

        assert [f.name for f in result.features] == ["Ok"]
        [diag] = result.diagnostics
        assert diag.kind == "MalformedNode"
        assert diag.location == f"{PATH}:2"
        assert PATH in str(diag)

    def test_malformed_method_skips_subtree(self):
        bad = Node(NodeKind.DEF, (None, None, klass("Hidden")), Location(2))
        result = extract_features(klass("Main", bad, defn("ok")), PATH)
        assert [c.name for c in result.features[0].children] == ["ok"]
        assert [d.kind for d in result.diagnostics] == ["MalformedNode"]

    def test_non_node_root(self):
        result = extract_features("class Main; end", PATH)
        assert result.features == ()
        assert [d.kind for d in result.diagnostics] == ["MalformedNode"]

    def test_too_deep_tree_does_not_raise(self):
        node = defn("leaf")
        for _ in range(5000):
            node = begin(node)
        result = extract_features(node, PATH)
        assert result.features == ()
        assert len(result.diagnostics) == 1

    def test_too_deep_subtree_keeps_shallow_features(self):
        deep = defn("leaf", line=9)
        for _ in range(FeatureTreeBuilder.MAX_DEPTH + 10):
            deep = begin(deep, line=5)
        root = klass("Main", defn("shallow", line=2), deep, defn("after", line=20))
        result = extract_features(root, PATH)

        assert [c.name for c in result.features[0].children] == ["shallow", "after"]
        [diag] = result.diagnostics
        assert diag.kind == "MalformedNode"
        assert diag.location == f"{PATH}:5"

    def test_builder_reuse_resets_diagnostics(self):
        builder = FeatureTreeBuilder(PATH)
        builder.build(None)
        result = builder.build(klass("Main"))
        assert result.diagnostics == ()


class TestSerialization:
    def test_idempotent_output(self):
        def make():
            return klass("Main", sclass(defn("s", line=3), line=2), send("private"), defn("p", line=6), line=1)

        first = json.dumps(features_to_dicts(extract_features(make(), PATH).features), indent=2)
        second = json.dumps(features_to_dicts(extract_features(make(), PATH).features), indent=2)
        assert first == second

    def test_dict_shape(self):
        root = klass("Main", defn("run", line=2), send("private"), defn("hide", line=4), line=1)
        [main] = features_to_dicts(extract_features(root, PATH).features)

        assert main == {
            "name": "Main",
            "location": f"{PATH}:1",
            "children": [
                {
                    "name": "run",
                    "location": f"{PATH}:2",
                    "type": "function",
                    "class_name": "Main",
                    "static": False,
                },
                {
                    "name": "hide",
                    "location": f"{PATH}:4",
                    "type": "function",
                    "class_name": "Main",
                    "static": False,
                    "visibility": "private",
                },
            ],
            "type": "class",
        }
