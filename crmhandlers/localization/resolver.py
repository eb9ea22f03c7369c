"""Localized display-name substitution for records and references.

Responsibilities:
- Detect record types that carry one localized name attribute per locale.
- Overwrite a record's primary name, or a reference's display name, with the
  value for a target locale.

A record type is localizable only when both `<primary>_1033` and
`<primary>_1036` exist next to its primary-name attribute.
"""

from __future__ import annotations

from ..errors import UnsupportedLocaleError
from ..host import OrganizationService
from ..models.datatypes import (
    SUPPORTED_LOCALE_IDS,
    Entity,
    EntityReference,
    LocaleMetadata,
)

USER_SETTINGS_ENTITY = "usersettings"
UI_LANGUAGE_ATTRIBUTE = "uilanguageid"


def resolve_metadata(service: OrganizationService, entity_name: str) -> LocaleMetadata | None:
    """Return locale metadata for a record type, or `None` when it is not fully localized."""

    schema = service.get_schema(entity_name)
    primary_name = schema.primary_name_attribute
    if not primary_name:
        return None

    localized: dict[int, str] = {}
    for locale_id in SUPPORTED_LOCALE_IDS:
        descriptor = schema.find_attribute(f"{primary_name}_{locale_id}")
        if descriptor is None:
            return None
        localized[locale_id] = descriptor.logical_name

    return LocaleMetadata(
        primary_name_attribute=primary_name,
        localized_name_attributes=localized,
    )


def localized_attribute_name(metadata: LocaleMetadata, locale_id: int) -> str:
    """Return the localized attribute for a locale or raise `UnsupportedLocaleError`."""

    try:
        return metadata.localized_name_attributes[locale_id]
    except KeyError:
        raise UnsupportedLocaleError(locale_id, metadata.localized_name_attributes) from None


def apply_locale(
    service: OrganizationService,
    record: Entity,
    locale_id: int,
    metadata: LocaleMetadata | None,
    optimistic: bool = False,
) -> None:
    """Replace a record's primary name with its value for `locale_id`.

    Args:
        service: Host data access used for the non-optimistic fetch.
        record: Record mutated in place.
        locale_id: Target UI language.
        metadata: Locale metadata of the record type; `None` makes this a no-op.
        optimistic: Read the localized value from the record itself when it
            is already loaded, skipping the fetch.

    Raises:
        UnsupportedLocaleError: If `locale_id` has no localized attribute.
    """

    if metadata is None:
        return

    attribute = localized_attribute_name(metadata, locale_id)
    if optimistic and attribute in record:
        record[metadata.primary_name_attribute] = record.get_string(attribute)
        return

    localized_record = service.fetch_by_id(
        record.logical_name, record.id, metadata.fetch_columns()
    )
    record[metadata.primary_name_attribute] = localized_record.get_string(attribute)


def apply_locale_to_reference(
    service: OrganizationService,
    reference: EntityReference,
    locale_id: int,
) -> None:
    """Replace a reference's display name with the referenced record's localized name."""

    metadata = resolve_metadata(service, reference.logical_name)
    if metadata is None:
        return

    attribute = localized_attribute_name(metadata, locale_id)
    localized_record = service.fetch_by_id(
        reference.logical_name, reference.id, metadata.fetch_columns()
    )
    reference.name = localized_record.get_string(attribute)


def get_user_locale(service: OrganizationService, user_id: str) -> int:
    """Return the UI language id stored in a user's settings record."""

    settings = service.fetch_by_id(USER_SETTINGS_ENTITY, user_id, [UI_LANGUAGE_ATTRIBUTE])
    value = settings.get(UI_LANGUAGE_ATTRIBUTE)
    return int(value) if value is not None else 0
