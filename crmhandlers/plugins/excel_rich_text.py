"""Rich-text cleanup for Excel exports.

Responsibilities:
- Detect invocations that belong to an "Export to Excel" message chain.
- Replace HTML in every rich-text attribute of the exported records with plain text.
"""

from __future__ import annotations

from ..config import HandlerConfig
from ..host import OrganizationService
from ..metadata import rich_text_attributes
from ..models.datatypes import PARAM_BUSINESS_ENTITY_COLLECTION, EntityCollection, ExecutionContext
from ..telemetry.logger import HandlerLogger
from ..text.html import HtmlNormalizer

HANDLER_NAME = "excel_rich_text"


def is_export_to_excel(context: ExecutionContext, message_name: str) -> bool:
    """Return whether this invocation or any ancestor carries `message_name`."""

    return any(current.message_name == message_name for current in context.iter_chain())


class ExcelRichTextHandler:
    """Strip HTML from rich-text attributes before records are exported."""

    def __init__(
        self,
        service: OrganizationService,
        config: HandlerConfig | None = None,
        logger: HandlerLogger | None = None,
    ) -> None:
        """Initialize with host data access, settings and optional logging."""

        self.service = service
        self.config = config or HandlerConfig()
        self.normalizer = HtmlNormalizer.for_mode(self.config.normalizer_mode)
        self.logger = logger

    def execute(self, context: ExecutionContext) -> int:
        """Normalize exported rich-text values and return how many were rewritten."""

        if not is_export_to_excel(context, self.config.export_message_name):
            self._skip("not_export")
            return 0

        collection = context.output_parameters.get(PARAM_BUSINESS_ENTITY_COLLECTION)
        if not isinstance(collection, EntityCollection):
            self._skip("no_collection")
            return 0
        if len(collection) < 1:
            self._skip("empty_collection")
            return 0

        schema = self.service.get_schema(context.primary_entity_name)
        attributes = rich_text_attributes(schema)
        if not attributes:
            self._skip("no_rich_text_attributes")
            return 0

        rewritten = 0
        for record in collection:
            for attribute in sorted(attributes):
                value = record.get_string(attribute)
                if value is None:
                    continue
                record[attribute] = self.normalizer.normalize(value)
                rewritten += 1

        if self.logger is not None:
            self.logger.log_complete(
                HANDLER_NAME,
                entity=context.primary_entity_name,
                records=len(collection),
                values=rewritten,
            )
        return rewritten

    def _skip(self, reason: str) -> None:
        if self.logger is not None:
            self.logger.log_skip(HANDLER_NAME, reason)
