from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from bitdrift.core.tree import SEQUENCE, is_container, tree_equal, tree_items, tree_kind


NO_DRIFT_SUMMARY = "No drift detected."
PATH_SEPARATOR = "."

# Field name, or a sequence position (int) in flattened results.
FieldKey = Union[str, int]


def _merge_fields(target: dict[FieldKey, Any], source: dict[FieldKey, Any]) -> dict[FieldKey, Any]:
    """Merge source into target: names overwrite, positions are appended and renumbered."""

    merged: dict[FieldKey, Any] = {}
    position = 0
    for fields in (target, source):
        for k, v in fields.items():
            if isinstance(k, int):
                merged[position] = v
                position += 1
            else:
                merged[k] = v
    return merged


@dataclass
class ChangeSet:
    """Fields partitioned into added/removed/modified, each in discovery order.

    Keys are field names; flattened comparisons of sequences use int positions.
    """

    added: dict[FieldKey, Any] = field(default_factory=dict)
    removed: dict[FieldKey, Any] = field(default_factory=dict)
    modified: dict[FieldKey, Any] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def merge(self, other: ChangeSet) -> None:
        # Same-name entries overwrite, keeping the first position.
        self.added = _merge_fields(self.added, other.added)
        self.removed = _merge_fields(self.removed, other.removed)
        self.modified = _merge_fields(self.modified, other.modified)

    def to_dict(self) -> dict[str, Any]:
        return {
            "added": {str(k): v for k, v in self.added.items()},
            "removed": {str(k): v for k, v in self.removed.items()},
            "modified": {str(k): v for k, v in self.modified.items()},
        }


def _require_container(v: Any, role: str) -> None:
    if not is_container(v):
        raise TypeError(f"{role} must be a mapping or sequence, got {tree_kind(v)}")


def escape_path_segment(name: str) -> str:
    """Escape "~" as "~0" and "." as "~1" so dotted paths stay unambiguous."""

    return name.replace("~", "~0").replace(PATH_SEPARATOR, "~1")


class _Keys:
    """Builds result keys for one container level."""

    def __init__(self, prefix: str | None, *, root: bool = True) -> None:
        self.prefix = prefix
        self.root = root

    @property
    def qualified(self) -> bool:
        return self.prefix is not None

    def key(self, container: Any, name: str) -> FieldKey:
        if not self.qualified:
            return int(name) if tree_kind(container) == SEQUENCE else name
        segment = escape_path_segment(name)
        return segment if self.root else f"{self.prefix}{PATH_SEPARATOR}{segment}"

    def child(self, key: FieldKey) -> _Keys:
        return _Keys(str(key) if self.qualified else None, root=False)


def _compare(baseline: Any, observed: Any, keys: _Keys) -> ChangeSet:
    changes = ChangeSet()
    base_fields = dict(tree_items(baseline))
    seen: set[str] = set()

    for name, value in tree_items(observed):
        seen.add(name)
        key = keys.key(observed, name)
        if name not in base_fields:
            changes.added[key] = value
            continue

        old = base_fields[name]
        if is_container(value) and is_container(old):
            changes.merge(_compare(old, value, keys.child(key)))
        elif not tree_equal(old, value):
            changes.modified[key] = value

    for name, old in base_fields.items():
        if name not in seen:
            changes.removed[keys.key(baseline, name)] = old

    return changes


def compare(baseline: Any, observed: Any) -> ChangeSet:
    """Recursively partition two containers into a ChangeSet.

    Nested changes are merged into the result under their local field name, so
    {"a": {"x": 1}} vs {"a": {"x": 2}, "x": 3} reports "x" both as modified
    (from "a") and as added (top level). Within one category a nested entry
    replaces an earlier entry of the same name. Sequence positions are int keys;
    nested ones are appended and renumbered on merge instead of overwriting, so
    {"a": [1, 2], "b": [3, 4]} vs {"a": [1, 9], "b": [3, 8]} modifies 0 and 1.
    Use compare_paths() when collisions matter.
    """

    _require_container(baseline, "baseline")
    _require_container(observed, "observed")
    return _compare(baseline, observed, _Keys(None))


def compare_paths(baseline: Any, observed: Any) -> ChangeSet:
    """Like compare(), but keys are dotted paths ("a.x", "items.0") and never collide.

    Segments containing "." or "~" are escaped (see escape_path_segment), so the
    key "a.x" is reported as "a~1x" and cannot be confused with field x of a.
    """

    _require_container(baseline, "baseline")
    _require_container(observed, "observed")
    return _compare(baseline, observed, _Keys(""))


def summarize(changes: ChangeSet) -> str:
    """One-line count summary, e.g. "1 fields added, 1 fields modified."

    The noun stays plural for every count.
    """

    parts: list[str] = []
    if changes.added:
        parts.append(f"{len(changes.added)} fields added")
    if changes.removed:
        parts.append(f"{len(changes.removed)} fields removed")
    if changes.modified:
        parts.append(f"{len(changes.modified)} fields modified")

    if not parts:
        return NO_DRIFT_SUMMARY
    return ", ".join(parts) + "."
