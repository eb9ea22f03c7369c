"""Host-facing datatypes shared across crmhandlers modules.

Responsibilities:
- Represent the transient records, references and schemas the host pipeline
  hands to a handler for one invocation.
- Provide a narrow, typed view of the invocation context.

Key types:
- `Entity`, `EntityReference`, `EntityCollection`, `AttributeDescriptor`,
  `EntitySchema`, `LocaleMetadata`, and `ExecutionContext`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Mapping

STRING_ATTRIBUTE_TYPE = "String"
MEMO_ATTRIBUTE_TYPE = "Memo"
RICH_TEXT_FORMAT_NAME = "RichText"

LOCALE_ENGLISH = 1033
LOCALE_FRENCH = 1036
SUPPORTED_LOCALE_IDS = (LOCALE_ENGLISH, LOCALE_FRENCH)

PARAM_BUSINESS_ENTITY = "BusinessEntity"
PARAM_BUSINESS_ENTITY_COLLECTION = "BusinessEntityCollection"


@dataclass(slots=True)
class EntityReference:
    """Pointer to another record, as carried inside a record's attributes.

    Attributes:
        logical_name: Record type of the referenced record.
        id: Identifier of the referenced record.
        name: Display name shown for the reference.
    """

    logical_name: str
    id: str
    name: str | None = None


@dataclass(slots=True)
class Entity:
    """A mutable record: a type, an id and an attribute bag.

    Attributes:
        logical_name: Record type logical name.
        id: Record identifier.
        attributes: Attribute name to value mapping, mutated in place.
    """

    logical_name: str
    id: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def get(self, key: str, default: Any = None) -> Any:
        """Return an attribute value, or `default` when the attribute is absent."""

        return self.attributes.get(key, default)

    def get_string(self, key: str) -> str | None:
        """Return an attribute value only when it is a string."""

        value = self.attributes.get(key)
        return value if isinstance(value, str) else None

    def references(self) -> list[EntityReference]:
        """Return every attribute value that is a reference, in attribute order."""

        return [value for value in self.attributes.values() if isinstance(value, EntityReference)]


@dataclass(slots=True)
class EntityCollection:
    """Result set of a multi-record retrieve."""

    entity_name: str
    entities: list[Entity] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)


@dataclass(frozen=True, slots=True)
class AttributeDescriptor:
    """Schema entry for one attribute of a record type.

    Attributes:
        logical_name: Attribute logical name.
        attribute_type: Declared kind (`String`, `Memo`, `Integer`, `Lookup`, ...).
        format_name: Optional format tag, `RichText` for HTML-capable text.
    """

    logical_name: str
    attribute_type: str = STRING_ATTRIBUTE_TYPE
    format_name: str | None = None


@dataclass(frozen=True, slots=True)
class EntitySchema:
    """Attribute schema of one record type."""

    logical_name: str
    primary_name_attribute: str | None
    attributes: tuple[AttributeDescriptor, ...] = field(default_factory=tuple)

    def find_attribute(self, logical_name: str) -> AttributeDescriptor | None:
        """Return the descriptor with the given logical name, if declared."""

        return next(
            (attribute for attribute in self.attributes if attribute.logical_name == logical_name),
            None,
        )


@dataclass(frozen=True, slots=True)
class LocaleMetadata:
    """Names of the primary-name attribute and its per-locale siblings.

    Attributes:
        primary_name_attribute: Attribute holding the display name.
        localized_name_attributes: Locale id to localized attribute name.
    """

    primary_name_attribute: str
    localized_name_attributes: Mapping[int, str]

    def fetch_columns(self) -> list[str]:
        """Return the localized columns requested on a fetch, in locale order."""

        return [self.localized_name_attributes[locale_id] for locale_id in SUPPORTED_LOCALE_IDS]


@dataclass(slots=True)
class ExecutionContext:
    """One invocation of a handler by the host message pipeline.

    Attributes:
        message_name: Host message that triggered this invocation.
        primary_entity_name: Record type the message operates on.
        user_id: Identifier of the calling user.
        output_parameters: Named output bag (`BusinessEntity`, ...).
        shared_variables: Per-invocation marker bag shared between handlers.
        parent_context: Invocation that triggered this one, if any.
    """

    message_name: str
    primary_entity_name: str = ""
    user_id: str | None = None
    output_parameters: dict[str, Any] = field(default_factory=dict)
    shared_variables: dict[str, Any] = field(default_factory=dict)
    parent_context: ExecutionContext | None = None

    def iter_chain(self) -> Iterator[ExecutionContext]:
        """Yield this context followed by each ancestor, nearest first."""

        current: ExecutionContext | None = self
        while current is not None:
            yield current
            current = current.parent_context
