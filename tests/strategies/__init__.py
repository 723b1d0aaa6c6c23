"""Hypothesis strategies for jsonlocalization property-based testing.

Usage:
    from tests.strategies import culture_names, resource_documents

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - culture_names, json_scalars, resource_documents
"""

from .resources import culture_names, json_scalars, resource_documents, resource_key_segments

__all__ = [
    "culture_names",
    "json_scalars",
    "resource_documents",
    "resource_key_segments",
]
