from __future__ import annotations

from pathlib import Path


BASELINE_SUFFIX = ".json"


def normalize_baseline_key(key: str) -> str:
    """Normalize a baseline key to POSIX segments and reject escapes.

    Keys may be nested ("api/users-list"); each segment becomes a directory
    under the baseline root.
    """

    if not isinstance(key, str) or not key:
        raise ValueError("baseline key missing/empty")
    if "\x00" in key:
        raise ValueError("baseline key contains NUL")
    if "\\" in key:
        raise ValueError("baseline key must use '/' separators")
    if key.startswith("/"):
        raise ValueError("absolute baseline keys are not allowed")
    if ":" in key:
        raise ValueError("baseline key must not contain ':'")
    if "//" in key:
        raise ValueError("baseline key must not contain '//' segments")

    parts = key.split("/")
    if any(p in ("", ".", "..") for p in parts):
        raise ValueError("baseline key must not contain empty, '.' or '..' segments")
    return "/".join(parts)


def ensure_within_root(root: Path, target: Path) -> None:
    root_resolved = root.resolve()
    target_resolved = target.resolve()
    if root_resolved not in target_resolved.parents and root_resolved != target_resolved:
        raise ValueError("Resolved path escapes baseline root")


def baseline_file_path(root: Path, key: str) -> Path:
    """Return <root>/<key>.json, jailed within root."""

    rel = normalize_baseline_key(key)
    candidate = root.joinpath(*rel.split("/"))
    candidate = candidate.with_name(candidate.name + BASELINE_SUFFIX)
    ensure_within_root(root, candidate)
    return candidate


def baseline_key_from_path(root: Path, path: Path) -> str:
    rel = path.relative_to(root).as_posix()
    if not rel.endswith(BASELINE_SUFFIX):
        raise ValueError(f"not a baseline file: {rel}")
    return rel[: -len(BASELINE_SUFFIX)]
