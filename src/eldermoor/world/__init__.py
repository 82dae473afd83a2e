"""World reference data: the location catalog."""

from __future__ import annotations

from eldermoor.world.catalog import WorldCatalog, default_catalog


__all__ = [
    "WorldCatalog",
    "default_catalog",
]
