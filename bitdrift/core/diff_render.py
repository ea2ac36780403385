from __future__ import annotations

import difflib


BASELINE_HEADER = "--- Baseline"
CURRENT_HEADER = "+++ Current"


def render_unified_diff(before: str, after: str, *, context: int = 3) -> str:
    """Render a line-based unified diff of two serialized trees.

    The header lines are always present, even when the inputs are identical.
    """

    lines = [BASELINE_HEADER, CURRENT_HEADER]
    hunks = difflib.unified_diff(
        before.splitlines(),
        after.splitlines(),
        fromfile="Baseline",
        tofile="Current",
        n=context,
        lineterm="",
    )
    for i, line in enumerate(hunks):
        # difflib emits its own ---/+++ pair first; ours is already in place.
        if i < 2:
            continue
        lines.append(line)
    return "\n".join(lines) + "\n"
