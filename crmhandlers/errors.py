"""Exceptions raised by the handlers and the `crmhandlers` CLI."""

from __future__ import annotations

from collections.abc import Iterable


class HandlerStageError(RuntimeError):
    """Raised when a CLI stage such as `config` or `read` cannot proceed."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Record the failing stage, a readable detail and an optional fix hint."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class UnsupportedLocaleError(LookupError):
    """Raised when a locale id has no localized-name attribute mapping."""

    def __init__(self, locale_id: int, supported: Iterable[int]) -> None:
        """Initialize with the rejected locale id and the supported ids."""

        self.locale_id = locale_id
        self.supported = tuple(sorted(supported))
        supported_text = ", ".join(str(value) for value in self.supported)
        super().__init__(
            f"Unsupported locale id `{locale_id}`; supported: {supported_text}."
        )
