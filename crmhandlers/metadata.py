"""Attribute schema classification helpers."""

from __future__ import annotations

from .models.datatypes import (
    MEMO_ATTRIBUTE_TYPE,
    RICH_TEXT_FORMAT_NAME,
    STRING_ATTRIBUTE_TYPE,
    AttributeDescriptor,
    EntitySchema,
)

_TEXT_ATTRIBUTE_TYPES = frozenset({STRING_ATTRIBUTE_TYPE, MEMO_ATTRIBUTE_TYPE})


def is_rich_text_attribute(descriptor: AttributeDescriptor) -> bool:
    """Return whether a descriptor is a single- or multi-line text field in `RichText` format."""

    return (
        descriptor.attribute_type in _TEXT_ATTRIBUTE_TYPES
        and descriptor.format_name == RICH_TEXT_FORMAT_NAME
    )


def rich_text_attributes(schema: EntitySchema) -> frozenset[str]:
    """Return the logical names of every rich-text attribute declared by a schema."""

    return frozenset(
        descriptor.logical_name
        for descriptor in schema.attributes
        if is_rich_text_attribute(descriptor)
    )
