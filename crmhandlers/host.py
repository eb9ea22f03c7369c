"""Collaborator protocol for the host's metadata and data-access service."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models.datatypes import Entity, EntitySchema


class OrganizationService(Protocol):
    """Blocking metadata and record access provided by the host platform."""

    def get_schema(self, entity_name: str) -> EntitySchema:
        """Return the attribute schema for a record type."""

    def fetch_by_id(self, entity_name: str, record_id: str, columns: Sequence[str]) -> Entity:
        """Return a record with only the requested columns populated."""
