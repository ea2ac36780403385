"""Baseline stores: key -> tree persistence used by the drift service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from bitdrift.core.jail import (
    BASELINE_SUFFIX,
    baseline_file_path,
    baseline_key_from_path,
    normalize_baseline_key,
)
from bitdrift.core.json_pretty import loads_tree, tree_bytes, tree_sha256

logger = logging.getLogger(__name__)


class BaselineNotFound(LookupError):
    """No baseline has been captured under the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Baseline not found for key: {key}")
        self.key = key


class BaselineStore(Protocol):
    def load(self, key: str) -> Any: ...

    def save(self, key: str, value: Any) -> None: ...

    def exists(self, key: str) -> bool: ...

    def keys(self) -> list[str]: ...


class FileBaselineStore:
    """One pretty-printed JSON file per key under a root directory.

    Writes replace the whole file; concurrent writers race and the last one wins.
    """

    def __init__(self, root: Path) -> None:
        if not isinstance(root, Path):
            raise TypeError("root must be pathlib.Path")
        self.root = root

    def path_for(self, key: str) -> Path:
        return baseline_file_path(self.root, key)

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def load(self, key: str) -> Any:
        path = self.path_for(key)
        if not path.is_file():
            raise BaselineNotFound(key)
        logger.debug("loading baseline %r from %s", key, path)
        return loads_tree(path.read_bytes())

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        if path.exists() and (path.is_symlink() or not path.is_file()):
            raise ValueError(f"invalid baseline path: {path}")
        data = tree_bytes(value)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("saved baseline %r to %s (sha256 %s)", key, path, tree_sha256(value))

    def keys(self) -> list[str]:
        if not self.root.is_dir():
            return []
        out = [
            baseline_key_from_path(self.root, p)
            for p in self.root.rglob("*" + BASELINE_SUFFIX)
            if p.is_file()
        ]
        return sorted(out)


class MemoryBaselineStore:
    """In-process store holding the same bytes a FileBaselineStore would write."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def exists(self, key: str) -> bool:
        return normalize_baseline_key(key) in self._blobs

    def load(self, key: str) -> Any:
        blob = self._blobs.get(normalize_baseline_key(key))
        if blob is None:
            raise BaselineNotFound(key)
        return loads_tree(blob)

    def save(self, key: str, value: Any) -> None:
        self._blobs[normalize_baseline_key(key)] = tree_bytes(value)

    def keys(self) -> list[str]:
        return sorted(self._blobs)
