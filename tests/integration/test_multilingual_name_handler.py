"""Integration tests for the multilingual display-name handler."""

from __future__ import annotations

import io

import pytest

from crmhandlers.config import HandlerConfig
from crmhandlers.errors import UnsupportedLocaleError
from crmhandlers.models.datatypes import (
    Entity,
    EntityCollection,
    EntityReference,
    ExecutionContext,
)
from crmhandlers.plugins import MultilingualNameHandler
from crmhandlers.telemetry.logger import HandlerLogger


@pytest.fixture
def localized_service(service):
    """Extend the base fake with stored localized account names."""

    service.add_record("account", "a1", name_1033="Account", name_1036="Compte")
    service.add_record("account", "a2", name_1033="Parent", name_1036="Société mère")
    service.add_record("account", "a3", name_1033="Branch", name_1036="Succursale")
    return service


def _retrieve_context(user_id: str = "user-fr") -> tuple[ExecutionContext, Entity]:
    record = Entity(
        "account",
        "a1",
        {
            "name": "Account",
            "name_1036": "Compte",
            "parentaccountid": EntityReference("account", "a2", "Parent"),
            "primarycontactid": EntityReference("contact", "c1", "Jane Doe"),
        },
    )
    context = ExecutionContext(
        message_name="Retrieve",
        primary_entity_name="account",
        user_id=user_id,
        output_parameters={"BusinessEntity": record},
    )
    return context, record


def test_retrieve_localizes_record_optimistically_and_references(localized_service) -> None:
    """Single retrieves should reuse loaded values and fetch each localizable reference."""

    context, record = _retrieve_context()

    MultilingualNameHandler(localized_service).execute(context)

    assert record["name"] == "Compte"
    assert record["parentaccountid"].name == "Société mère"
    assert record["primarycontactid"].name == "Jane Doe"
    assert localized_service.fetch_calls == [
        ("usersettings", "user-fr", ("uilanguageid",)),
        ("account", "a2", ("name_1033", "name_1036")),
    ]


def test_retrieve_multiple_fetches_each_record_then_references(localized_service) -> None:
    """Multi-record retrieves should fetch localized names for every record."""

    collection = EntityCollection(
        "account",
        [
            Entity("account", "a1", {"name": "Compte", "name_1033": "stale"}),
            Entity(
                "account",
                "a3",
                {"name": "Succursale", "parentaccountid": EntityReference("account", "a2")},
            ),
        ],
    )
    context = ExecutionContext(
        message_name="RetrieveMultiple",
        primary_entity_name="account",
        user_id="user-en",
        output_parameters={"BusinessEntityCollection": collection},
    )

    MultilingualNameHandler(localized_service).execute(context)

    first, second = collection.entities
    assert first["name"] == "Account"
    assert second["name"] == "Branch"
    assert second["parentaccountid"].name == "Parent"
    assert [call[:2] for call in localized_service.fetch_calls] == [
        ("usersettings", "user-en"),
        ("account", "a1"),
        ("account", "a3"),
        ("account", "a2"),
    ]


def test_handler_runs_once_per_invocation_context(
    localized_service, handler_logger: HandlerLogger, log_sink: io.StringIO
) -> None:
    """Re-entry on the same context should be skipped; a new context runs again."""

    handler = MultilingualNameHandler(localized_service, logger=handler_logger)
    context, _ = _retrieve_context()

    handler.execute(context)
    calls_after_first_run = len(localized_service.fetch_calls)
    handler.execute(context)

    assert len(localized_service.fetch_calls) == calls_after_first_run
    assert "event=skip reason=reentry" in log_sink.getvalue()

    fresh_context, fresh_record = _retrieve_context()
    handler.execute(fresh_context)
    assert fresh_record["name"] == "Compte"
    assert len(localized_service.fetch_calls) == calls_after_first_run * 2


def test_preset_marker_in_shared_variables_blocks_handler(localized_service) -> None:
    """A caller-injected marker should suppress the handler entirely."""

    context, record = _retrieve_context()
    context.shared_variables[HandlerConfig().reentry_marker] = True

    MultilingualNameHandler(localized_service).execute(context)

    assert record["name"] == "Account"
    assert localized_service.fetch_calls == []


def test_unsupported_user_locale_fails_without_mutation(
    localized_service, handler_logger: HandlerLogger, log_sink: io.StringIO
) -> None:
    """A user locale outside 1033/1036 should raise and leave the record as-is."""

    context, record = _retrieve_context(user_id="user-ja")

    with pytest.raises(UnsupportedLocaleError):
        MultilingualNameHandler(localized_service, logger=handler_logger).execute(context)

    assert record["name"] == "Account"
    assert "event=failure error_type=UnsupportedLocaleError" in log_sink.getvalue()


def test_locale_override_and_reference_toggle_from_config(localized_service) -> None:
    """Configured locale should skip the settings fetch; references may be left alone."""

    context, record = _retrieve_context(user_id="user-fr")
    config = HandlerConfig(locale_override=1033, localize_references=False)

    MultilingualNameHandler(localized_service, config).execute(context)

    assert record["name"] == "Account"
    assert record["parentaccountid"].name == "Parent"
    assert localized_service.fetch_calls == [("account", "a1", ("name_1033", "name_1036"))]


def test_other_messages_are_ignored(localized_service) -> None:
    """Only retrieve and retrieve-multiple messages should be handled."""

    context, record = _retrieve_context()
    context.message_name = "Update"

    MultilingualNameHandler(localized_service).execute(context)

    assert record["name"] == "Account"
    assert localized_service.fetch_calls == []
