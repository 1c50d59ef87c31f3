"""
Default skip rules and limits for resource selection.
"""

from __future__ import annotations

# Build-output and tooling directories. Any path segment (relative to the
# search root) equal to one of these names is never selected.
SKIP_DIRECTORY_NAMES: frozenset[str] = frozenset(
    {
        "target",
        "build",
        "out",
        ".gradle",
        "node_modules",
        ".metadata",
    }
)

# Maximum walk depth. The search root is depth 0.
MAX_WALK_DEPTH = 16

BYTES_PER_MB = 1024 * 1024
