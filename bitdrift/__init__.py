"""bitdrift: behavioral drift detection for JSON-shaped data.

Capture a baseline once, then check freshly observed data against it.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def __getattr__(name: str):
    if name == "__version__":
        try:
            return version("bitdrift")
        except PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)
