"""Tree values: the JSON-shaped data model shared by baselines and observations.

A tree value is a primitive (None, bool, int, float, str) or a container. Two
container shapes exist: mappings (dict with str keys, insertion order is
significant) and sequences (list or tuple, treated as a mapping keyed by
position).
"""

from __future__ import annotations

import math
from typing import Any, Iterator, Union

TreeValue = Union[None, bool, int, float, str, list, tuple, dict]

NULL = "null"
BOOLEAN = "boolean"
INTEGER = "integer"
NUMBER = "number"
STRING = "string"
SEQUENCE = "sequence"
MAPPING = "mapping"

TREE_KINDS = frozenset({NULL, BOOLEAN, INTEGER, NUMBER, STRING, SEQUENCE, MAPPING})
CONTAINER_KINDS = frozenset({SEQUENCE, MAPPING})


def tree_kind(v: Any) -> str:
    """Return the closed kind tag of a single tree node.

    bool is checked before int so that True/False never classify as integers.
    Raises TypeError for values outside the tree model.
    """

    if v is None:
        return NULL
    if isinstance(v, bool):
        return BOOLEAN
    if isinstance(v, int):
        return INTEGER
    if isinstance(v, float):
        return NUMBER
    if isinstance(v, str):
        return STRING
    if isinstance(v, (list, tuple)):
        return SEQUENCE
    if isinstance(v, dict):
        return MAPPING
    raise TypeError(f"unsupported tree value type: {type(v).__name__}")


def is_container(v: Any) -> bool:
    return tree_kind(v) in CONTAINER_KINDS


def tree_items(v: Any) -> Iterator[tuple[str, Any]]:
    """Yield (field, child) pairs of a container in order.

    Sequence positions are exposed as their decimal string ("0", "1", ...).
    """

    kind = tree_kind(v)
    if kind == MAPPING:
        yield from v.items()
    elif kind == SEQUENCE:
        for i, item in enumerate(v):
            yield str(i), item
    else:
        raise TypeError(f"expected mapping or sequence, got {kind}")


def ensure_tree(v: Any, *, path: str = "$") -> None:
    """Validate that v is a well-formed tree value, recursively.

    Rejects non-string mapping keys, non-finite floats and foreign types, so
    that a captured value survives the JSON round trip unchanged.
    """

    kind = tree_kind(v)
    if kind == NUMBER and not math.isfinite(v):
        raise ValueError(f"{path}: non-finite number not allowed")
    if kind == MAPPING:
        for k, child in v.items():
            if not isinstance(k, str):
                raise TypeError(f"{path}: mapping keys must be strings, got {type(k).__name__}")
            ensure_tree(child, path=f"{path}.{k}")
    elif kind == SEQUENCE:
        for i, child in enumerate(v):
            ensure_tree(child, path=f"{path}[{i}]")


def tree_equal(a: Any, b: Any) -> bool:
    """Strict structural equality.

    Same kind and same value; mappings additionally need identical key order.
    "1" != 1, 1 != 1.0, True != 1, {"a": 1, "b": 2} != {"b": 2, "a": 1}.
    """

    kind = tree_kind(a)
    if kind != tree_kind(b):
        return False

    if kind == MAPPING:
        if len(a) != len(b):
            return False
        for (ka, va), (kb, vb) in zip(a.items(), b.items()):
            if ka != kb or not tree_equal(va, vb):
                return False
        return True

    if kind == SEQUENCE:
        if len(a) != len(b):
            return False
        return all(tree_equal(x, y) for x, y in zip(a, b))

    return a == b
