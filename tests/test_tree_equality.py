"""Tests for the tree value model and strict structural equality."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bitdrift.core.tree import ensure_tree, is_container, tree_equal, tree_items, tree_kind


class TestTreeKind:
    @pytest.mark.parametrize(
        "value, kind",
        [
            (None, "null"),
            (True, "boolean"),
            (0, "integer"),
            (1.5, "number"),
            ("x", "string"),
            ([1], "sequence"),
            ((1, 2), "sequence"),
            ({"a": 1}, "mapping"),
        ],
    )
    def test_closed_kinds(self, value: object, kind: str) -> None:
        assert tree_kind(value) == kind

    def test_bool_is_not_integer(self) -> None:
        assert tree_kind(False) == "boolean"

    def test_foreign_type_rejected(self) -> None:
        with pytest.raises(TypeError, match="unsupported"):
            tree_kind({1, 2})

    def test_is_container(self) -> None:
        assert is_container({})
        assert is_container([])
        assert not is_container("abc")

    def test_sequence_items_use_string_positions(self) -> None:
        assert list(tree_items(["a", "b"])) == [("0", "a"), ("1", "b")]

    def test_items_of_primitive_rejected(self) -> None:
        with pytest.raises(TypeError, match="expected mapping or sequence"):
            list(tree_items(3))


class TestEnsureTree:
    def test_accepts_nested_json_shapes(self) -> None:
        ensure_tree({"a": [1, 2.5, None, True, {"b": "c"}]})

    def test_rejects_non_string_keys(self) -> None:
        with pytest.raises(TypeError, match=r"\$\.a: mapping keys must be strings"):
            ensure_tree({"a": {1: "x"}})

    def test_rejects_nan(self) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            ensure_tree({"a": [float("nan")]})

    def test_rejects_foreign_leaf(self) -> None:
        with pytest.raises(TypeError):
            ensure_tree({"a": object()})


class TestTreeEqual:
    def test_identical_nested_values(self) -> None:
        a = {"status": "ok", "items": [1, {"x": None}]}
        b = {"status": "ok", "items": [1, {"x": None}]}
        assert tree_equal(a, b)

    def test_key_order_matters(self) -> None:
        assert not tree_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_nested_key_order_matters(self) -> None:
        assert not tree_equal({"o": {"a": 1, "b": 2}}, {"o": {"b": 2, "a": 1}})

    def test_string_vs_number(self) -> None:
        assert not tree_equal({"x": "1"}, {"x": 1})

    def test_bool_vs_int(self) -> None:
        assert not tree_equal(True, 1)
        assert not tree_equal({"flag": 0}, {"flag": False})

    def test_int_vs_float(self) -> None:
        assert not tree_equal(1, 1.0)

    def test_null_vs_missing(self) -> None:
        assert not tree_equal({"a": None}, {})

    def test_list_and_tuple_are_both_sequences(self) -> None:
        assert tree_equal([1, 2], (1, 2))

    def test_sequence_order_and_length(self) -> None:
        assert not tree_equal([1, 2], [2, 1])
        assert not tree_equal([1, 2], [1, 2, 3])

    def test_mapping_vs_sequence(self) -> None:
        assert not tree_equal({"0": 1}, [1])
