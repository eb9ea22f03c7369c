"""Typed host models used by the handlers."""

from .datatypes import (
    AttributeDescriptor,
    Entity,
    EntityCollection,
    EntityReference,
    EntitySchema,
    ExecutionContext,
    LocaleMetadata,
)

__all__ = [
    "AttributeDescriptor",
    "Entity",
    "EntityCollection",
    "EntityReference",
    "EntitySchema",
    "ExecutionContext",
    "LocaleMetadata",
]
