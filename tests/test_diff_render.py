from __future__ import annotations

import hashlib
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bitdrift.core.diff_render import render_unified_diff
from bitdrift.core.json_pretty import dumps_tree, loads_tree, tree_bytes, tree_sha256


def test_dumps_tree_is_indented_and_keeps_key_order() -> None:
    assert dumps_tree({"b": 1, "a": [True, None]}) == (
        '{\n    "b": 1,\n    "a": [\n        true,\n        null\n    ]\n}'
    )


def test_dumps_tree_keeps_unicode() -> None:
    assert dumps_tree({"name": "Zoë"}) == '{\n    "name": "Zoë"\n}'


def test_tree_bytes_has_trailing_lf_and_loads_back() -> None:
    data = tree_bytes({"status": "success"})
    assert data == b'{\n    "status": "success"\n}\n'
    assert loads_tree(data) == {"status": "success"}


def test_render_single_field_change() -> None:
    diff = render_unified_diff(dumps_tree({"status": "success"}), dumps_tree({"status": "failure"}))
    assert diff == (
        "--- Baseline\n"
        "+++ Current\n"
        "@@ -1,3 +1,3 @@\n"
        " {\n"
        '-    "status": "success"\n'
        '+    "status": "failure"\n'
        " }\n"
    )


def test_render_identical_inputs_keeps_headers() -> None:
    text = dumps_tree({"a": 1})
    assert render_unified_diff(text, text) == "--- Baseline\n+++ Current\n"


def test_render_reordered_keys_shows_lines() -> None:
    diff = render_unified_diff(dumps_tree({"a": 1, "b": 2}), dumps_tree({"b": 2, "a": 1}))
    lines = diff.splitlines()
    assert lines[:2] == ["--- Baseline", "+++ Current"]
    assert any(line.startswith("-") and '"a": 1' in line for line in lines[2:])
    assert any(line.startswith("+") and '"a": 1' in line for line in lines[2:])


def test_tree_sha256_fingerprints_stored_bytes() -> None:
    expected = hashlib.sha256(b'{\n    "status": "success"\n}\n').hexdigest()
    assert tree_sha256({"status": "success"}) == expected
    assert tree_sha256({"a": 1, "b": 2}) != tree_sha256({"b": 2, "a": 1})
