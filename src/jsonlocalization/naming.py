"""Mapping of Python types and base names to resource names.

A class ``myapp.models.Foo`` whose top-level package is ``myapp`` has the
resource name ``models.Foo``; its files are ``models.Foo.fr.json`` or
``models/Foo.fr.json`` under a resource root.

Packages customize the mapping with two optional module attributes on the
top-level package:

    __root_namespace__ = "myapp.web"   # prefix trimmed instead of "myapp"
    __resource_location__ = "i18n"     # resource root for all its types

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import sys

__all__ = [
    "get_resource_location",
    "get_root_namespace",
    "resource_name_for_type",
    "trim_prefix",
]

_LOCALS_SEGMENT = "<locals>."


def _top_level_package(module_name: str) -> object | None:
    return sys.modules.get(module_name.partition(".")[0])


def get_root_namespace(module_name: str) -> str:
    """Return the namespace prefix trimmed from type names of a module.

    Uses ``__root_namespace__`` of the top-level package when it is set,
    otherwise the top-level package name itself.

    Example:
        >>> get_root_namespace("myapp.models.user")
        'myapp'
    """
    root_namespace = getattr(_top_level_package(module_name), "__root_namespace__", None)
    if isinstance(root_namespace, str) and root_namespace:
        return root_namespace
    return module_name.partition(".")[0]


def get_resource_location(module_name: str) -> str | None:
    """Return the resource root declared by a module's top-level package, if any."""
    location = getattr(_top_level_package(module_name), "__resource_location__", None)
    if isinstance(location, str) and location.strip():
        return location
    return None


def trim_prefix(name: str, prefix: str) -> str:
    """Remove a dotted ``prefix`` from the start of ``name``.

    Example:
        >>> trim_prefix("myapp.models.Foo", "myapp")
        'models.Foo'
        >>> trim_prefix("other.Foo", "myapp")
        'other.Foo'
    """
    if prefix and name.startswith(f"{prefix}."):
        return name[len(prefix) + 1 :]
    return name


def resource_name_for_type(resource_source: type) -> str:
    """Derive the dotted resource name of a class.

    Classes defined inside functions drop their ``<locals>`` segments so the
    name stays a plain dotted path.

    Raises:
        TypeError: If resource_source is not a class

    Example:
        >>> class Foo: ...
        >>> Foo.__module__ = "myapp.models"
        >>> resource_name_for_type(Foo)
        'models.Foo'
    """
    if not isinstance(resource_source, type):
        msg = f"Expected a class, got {type(resource_source).__name__}"
        raise TypeError(msg)

    qualname = resource_source.__qualname__.replace(_LOCALS_SEGMENT, "")
    full_name = f"{resource_source.__module__}.{qualname}"
    return trim_prefix(full_name, get_root_namespace(resource_source.__module__))
