from __future__ import annotations

import hashlib
import json
from typing import Any


INDENT = 4


def dumps_tree(obj: Any) -> str:
    """Return the pretty JSON text of a tree (4-space indent, insertion key order, no trailing LF).

    Key order is kept as inserted so that reordered mappings show up as drift
    in the rendered diff.
    """

    return json.dumps(obj, ensure_ascii=False, indent=INDENT, allow_nan=False)


def tree_bytes(obj: Any) -> bytes:
    """Return the on-disk baseline encoding (pretty JSON, UTF-8, trailing LF)."""

    return (dumps_tree(obj) + "\n").encode("utf-8", errors="strict")


def loads_tree(data: bytes) -> Any:
    return json.loads(data.decode("utf-8", errors="strict"))


def tree_sha256(obj: Any) -> str:
    """Fingerprint of a tree as stored on disk (sha256 of tree_bytes)."""

    return hashlib.sha256(tree_bytes(obj)).hexdigest()
