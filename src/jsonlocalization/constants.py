"""Shared constants for jsonlocalization.

Constants are grouped by domain:
- Resource files: naming of JSON resource files on disk
- Cultures: the invariant culture sentinel
- Depth limits: recursion protection for JSON flattening
- Diagnostics: retention of load results

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Resource files
    "JSON_FILE_EXTENSION",
    "JSON_FILE_PATTERN",
    "DEFAULT_RESOURCES_PATH",
    # Cultures
    "INVARIANT_CULTURE",
    # Depth limits
    "MAX_DEPTH",
    # Diagnostics
    "MAX_LOAD_RESULTS",
]

# ============================================================================
# RESOURCE FILES
# ============================================================================

JSON_FILE_EXTENSION: str = ".json"

# Glob pattern used by the file watcher.
JSON_FILE_PATTERN: str = "*.json"

DEFAULT_RESOURCES_PATH: str = "Resources"

# ============================================================================
# CULTURES
# ============================================================================

# The invariant culture terminates every parent chain and never has a file.
INVARIANT_CULTURE: str = ""

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth of objects/arrays flattened from one resource file.
# Legitimate resource files rarely exceed 5 levels; anything deeper than this
# is treated as malformed input rather than risking RecursionError.
MAX_DEPTH: int = 100

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Load results kept per resource manager; older ones are discarded first.
# Live reload appends a result on every change event.
MAX_LOAD_RESULTS: int = 1000
