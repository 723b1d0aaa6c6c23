"""Caching primitives shared by localizers.

Python 3.13+. Zero external dependencies.
"""

from jsonlocalization.caching.names_cache import ResourceNamesCache, ResourceNamesCacheProtocol

__all__ = ["ResourceNamesCache", "ResourceNamesCacheProtocol"]
