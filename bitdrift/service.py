"""Drift service: capture baselines and check observations against them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from bitdrift.core.compare import NO_DRIFT_SUMMARY, ChangeSet, compare, compare_paths, summarize
from bitdrift.core.diff_render import render_unified_diff
from bitdrift.core.json_pretty import dumps_tree
from bitdrift.core.tree import ensure_tree, is_container, tree_equal
from bitdrift.store import BaselineStore

logger = logging.getLogger(__name__)


ROOT_FIELD = "$"
DriftType = Literal["added", "removed", "modified"]
DETAIL_TYPES: tuple[DriftType, ...] = ("added", "removed", "modified")


@dataclass(frozen=True)
class DriftResult:
    drift_detected: bool
    diff: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"drift_detected": self.drift_detected, "diff": self.diff}


@dataclass(frozen=True)
class DriftDetail:
    type: DriftType
    field: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "field": self.field, "value": self.value}


@dataclass(frozen=True)
class DriftReport:
    drift_detected: bool
    summary: str
    details: list[DriftDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "drift_detected": self.drift_detected,
            "summary": self.summary,
            "details": [d.to_dict() for d in self.details],
        }


def flatten_changes(changes: ChangeSet) -> list[DriftDetail]:
    """List every change: all added, then removed, then modified."""

    details: list[DriftDetail] = []
    for kind in DETAIL_TYPES:
        for name, value in getattr(changes, kind).items():
            details.append(DriftDetail(type=kind, field=str(name), value=value))
    return details


class DriftService:
    """Orchestrates equality, comparison and diff rendering against a baseline store.

    The service holds no state of its own; every call reads the current
    baseline from the store.
    """

    def __init__(self, store: BaselineStore) -> None:
        self.store = store

    def capture(self, key: str, data: Any) -> None:
        """Persist data as the baseline for key, replacing any previous one."""

        ensure_tree(data)
        self.store.save(key, data)
        logger.debug("captured baseline %r", key)

    def baseline(self, key: str) -> Any:
        """Return the stored baseline for key; raises BaselineNotFound."""

        return self.store.load(key)

    def keys(self) -> list[str]:
        return self.store.keys()

    def monitor(self, key: str, data: Any) -> bool:
        """True when data strictly equals the stored baseline."""

        return tree_equal(self.store.load(key), data)

    def detect_drift(self, key: str, data: Any) -> DriftResult:
        baseline = self.store.load(key)
        if tree_equal(baseline, data):
            return DriftResult(drift_detected=False, diff=None)

        logger.debug("drift detected for %r", key)
        diff = render_unified_diff(dumps_tree(baseline), dumps_tree(data))
        return DriftResult(drift_detected=True, diff=diff)

    def get_drift_details(self, key: str, data: Any, *, qualified: bool = False) -> DriftReport:
        """Report drift as a summary line plus one detail per changed field.

        Nested field names are flattened to their local name unless qualified
        is set, in which case dotted paths are used.
        """

        baseline = self.store.load(key)
        if tree_equal(baseline, data):
            return DriftReport(drift_detected=False, summary=NO_DRIFT_SUMMARY, details=[])

        if is_container(baseline) and is_container(data):
            changes = compare_paths(baseline, data) if qualified else compare(baseline, data)
        else:
            changes = ChangeSet(modified={ROOT_FIELD: data})

        report = DriftReport(
            drift_detected=True,
            summary=summarize(changes),
            details=flatten_changes(changes),
        )
        logger.debug("drift details for %r: %s", key, report.summary)
        return report
