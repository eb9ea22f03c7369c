"""Localized display names for retrieved records.

Responsibilities:
- Run once per logical invocation, guarded by a shared-variable marker.
- Localize the primary name of retrieved records and the display names of
  the references they carry.
"""

from __future__ import annotations

from ..config import HandlerConfig
from ..host import OrganizationService
from ..localization.resolver import (
    apply_locale,
    apply_locale_to_reference,
    get_user_locale,
    resolve_metadata,
)
from ..models.datatypes import (
    PARAM_BUSINESS_ENTITY,
    PARAM_BUSINESS_ENTITY_COLLECTION,
    Entity,
    EntityCollection,
    ExecutionContext,
)
from ..telemetry.logger import HandlerLogger

HANDLER_NAME = "multilingual_name"
MSG_RETRIEVE = "retrieve"
MSG_RETRIEVE_MULTIPLE = "retrievemultiple"


class MultilingualNameHandler:
    """Substitute localized primary names on retrieve and retrieve-multiple."""

    def __init__(
        self,
        service: OrganizationService,
        config: HandlerConfig | None = None,
        logger: HandlerLogger | None = None,
    ) -> None:
        """Initialize with host data access, settings and optional logging."""

        self.service = service
        self.config = config or HandlerConfig()
        self.logger = logger

    def execute(self, context: ExecutionContext) -> None:
        """Localize the records in the context's output parameters."""

        marker = self.config.reentry_marker
        if marker in context.shared_variables:
            self._skip("reentry")
            return
        context.shared_variables[marker] = True

        message = context.message_name.lower()
        if message not in (MSG_RETRIEVE, MSG_RETRIEVE_MULTIPLE):
            self._skip("unsupported_message")
            return

        try:
            locale_id = self._resolve_locale(context)
            if message == MSG_RETRIEVE:
                records = self._localize_single(context, locale_id)
            else:
                records = self._localize_multiple(context, locale_id)
        except Exception as exc:
            if self.logger is not None:
                self.logger.log_failure(HANDLER_NAME, type(exc).__name__)
            raise

        if self.logger is not None:
            self.logger.log_complete(
                HANDLER_NAME, message=message, locale=locale_id, records=records
            )

    def _resolve_locale(self, context: ExecutionContext) -> int:
        if self.config.locale_override is not None:
            return self.config.locale_override
        if context.user_id is None:
            raise ValueError("Execution context has no `user_id` to resolve a locale for.")
        return get_user_locale(self.service, context.user_id)

    def _localize_single(self, context: ExecutionContext, locale_id: int) -> int:
        target = context.output_parameters.get(PARAM_BUSINESS_ENTITY)
        if not isinstance(target, Entity):
            return 0

        metadata = resolve_metadata(self.service, target.logical_name)
        apply_locale(
            self.service,
            target,
            locale_id,
            metadata,
            optimistic=self.config.optimistic_single_retrieve,
        )
        self._localize_references(target, locale_id)
        return 1

    def _localize_multiple(self, context: ExecutionContext, locale_id: int) -> int:
        target = context.output_parameters.get(PARAM_BUSINESS_ENTITY_COLLECTION)
        if not isinstance(target, EntityCollection):
            return 0

        metadata = resolve_metadata(self.service, target.entity_name)
        for record in target:
            apply_locale(self.service, record, locale_id, metadata)
        # References are walked only after every primary name is localized.
        for record in target:
            self._localize_references(record, locale_id)
        return len(target)

    def _localize_references(self, record: Entity, locale_id: int) -> None:
        if not self.config.localize_references:
            return
        for reference in record.references():
            apply_locale_to_reference(self.service, reference, locale_id)

    def _skip(self, reason: str) -> None:
        if self.logger is not None:
            self.logger.log_skip(HANDLER_NAME, reason)
