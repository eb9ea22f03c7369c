"""Locale-aware display name resolution."""

from .resolver import (
    apply_locale,
    apply_locale_to_reference,
    get_user_locale,
    resolve_metadata,
)

__all__ = [
    "apply_locale",
    "apply_locale_to_reference",
    "get_user_locale",
    "resolve_metadata",
]
