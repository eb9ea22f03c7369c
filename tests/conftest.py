"""Shared pytest fixtures for the crmhandlers test suite."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from crmhandlers.models.datatypes import AttributeDescriptor, EntitySchema
from crmhandlers.telemetry.logger import HandlerLogger
from tests.fakes import InMemoryOrganizationService, localized_schema


@pytest.fixture
def service() -> InMemoryOrganizationService:
    """Provide a fake host with a localized `account`, a partially localized
    `contact` and a non-localized `incident` record type."""

    fake = InMemoryOrganizationService()
    fake.add_schema(localized_schema("account"))
    fake.add_schema(
        EntitySchema(
            logical_name="contact",
            primary_name_attribute="fullname",
            attributes=(
                AttributeDescriptor("fullname"),
                AttributeDescriptor("fullname_1033"),
            ),
        )
    )
    fake.add_schema(
        EntitySchema(
            logical_name="incident",
            primary_name_attribute="title",
            attributes=(
                AttributeDescriptor("title"),
                AttributeDescriptor("description", "Memo", "RichText"),
                AttributeDescriptor("summary", "String", "RichText"),
                AttributeDescriptor("notes", "Memo", "Text"),
                AttributeDescriptor("priority", "Integer", "RichText"),
            ),
        )
    )
    fake.add_record("usersettings", "user-fr", uilanguageid=1036)
    fake.add_record("usersettings", "user-en", uilanguageid=1033)
    fake.add_record("usersettings", "user-ja", uilanguageid=1041)
    return fake


@pytest.fixture
def log_sink() -> io.StringIO:
    """Provide an in-memory sink for handler log lines."""

    return io.StringIO()


@pytest.fixture
def handler_logger(log_sink: io.StringIO) -> Iterator[HandlerLogger]:
    """Provide a handler logger writing to `log_sink`, detached after the test."""

    logger = HandlerLogger(sink=log_sink)
    yield logger
    logger.close()
