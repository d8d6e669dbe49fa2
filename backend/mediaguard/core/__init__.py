"""
Core rule tables for MediaGuard.

- registry: per-category profiles and the allowed_types / max_file_size accessors
"""

from mediaguard.core.registry import (
    CATEGORY_PROFILES,
    UnknownCategoryError,
    allowed_types,
    get_profile,
    iter_profiles,
    max_file_size,
)


__all__ = [
    "CATEGORY_PROFILES",
    "UnknownCategoryError",
    "allowed_types",
    "get_profile",
    "iter_profiles",
    "max_file_size",
]
