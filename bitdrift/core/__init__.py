"""Lowest-level bitdrift utilities.

Dependency direction rules:
- bitdrift.core must not import bitdrift.store, bitdrift.service or bitdrift.cli
"""

from bitdrift.core.compare import ChangeSet, compare, compare_paths, escape_path_segment, summarize
from bitdrift.core.diff_render import BASELINE_HEADER, CURRENT_HEADER, render_unified_diff
from bitdrift.core.jail import baseline_file_path, normalize_baseline_key
from bitdrift.core.json_pretty import dumps_tree, loads_tree, tree_bytes, tree_sha256
from bitdrift.core.tree import ensure_tree, is_container, tree_equal, tree_items, tree_kind

__all__ = [
    "BASELINE_HEADER",
    "CURRENT_HEADER",
    "ChangeSet",
    "baseline_file_path",
    "compare",
    "compare_paths",
    "dumps_tree",
    "ensure_tree",
    "escape_path_segment",
    "is_container",
    "loads_tree",
    "normalize_baseline_key",
    "render_unified_diff",
    "summarize",
    "tree_bytes",
    "tree_equal",
    "tree_items",
    "tree_kind",
    "tree_sha256",
]
