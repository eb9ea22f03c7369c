"""Configuration model and loaders for crmhandlers.

Responsibilities:
- Define handler settings as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `HandlerConfig`: normalized settings shared by both handlers.
- `ConfigLoader`: static construction helpers for `HandlerConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models.datatypes import SUPPORTED_LOCALE_IDS
from .parsing import (
    normalize_optional_string,
    parse_optional_locale_id,
    parse_required_boolean,
)
from .text.html import NORMALIZER_MODE_FULL, SUPPORTED_NORMALIZER_MODES


DEFAULT_EXPORT_MESSAGE_NAME = "ExportToExcel"
DEFAULT_REENTRY_MARKER = "crmhandlers.plugins.MultilingualNameHandler"


@dataclass(slots=True)
class HandlerConfig:
    """Settings for the rich-text and multilingual handlers.

    Attributes:
        normalizer_mode: HTML normalizer rule set, `full` or `legacy`.
        export_message_name: Message name that marks an Excel export chain.
        optimistic_single_retrieve: Read localized names from the retrieved
            record when already loaded, for single-record retrieves.
        localize_references: Also localize reference display names.
        locale_override: Fixed locale id used instead of the user's setting.
        reentry_marker: Shared-variable key guarding the multilingual handler.
    """

    normalizer_mode: str = NORMALIZER_MODE_FULL
    export_message_name: str = DEFAULT_EXPORT_MESSAGE_NAME
    optimistic_single_retrieve: bool = True
    localize_references: bool = True
    locale_override: int | None = None
    reentry_marker: str = DEFAULT_REENTRY_MARKER

    def validate(self) -> None:
        """Validate configuration values before handlers are built."""

        if self.normalizer_mode not in SUPPORTED_NORMALIZER_MODES:
            supported = ", ".join(sorted(SUPPORTED_NORMALIZER_MODES))
            raise ValueError(
                f"Unsupported `normalizer_mode` value `{self.normalizer_mode}`; "
                f"supported: {supported}."
            )
        self._require_non_empty(self.export_message_name, "export_message_name")
        self._require_non_empty(self.reentry_marker, "reentry_marker")
        if self.locale_override is not None and self.locale_override not in SUPPORTED_LOCALE_IDS:
            supported = ", ".join(str(value) for value in SUPPORTED_LOCALE_IDS)
            raise ValueError(
                f"Unsupported `locale_override` value `{self.locale_override}`; "
                f"supported: {supported}."
            )

    @staticmethod
    def _require_non_empty(value: str, field_name: str) -> None:
        """Validate that string fields are not empty."""

        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"`{field_name}` must be a non-empty string.")


class ConfigLoader:
    """Factory methods for creating `HandlerConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "normalizer_mode",
            "export_message_name",
            "optimistic_single_retrieve",
            "localize_references",
            "locale_override",
            "reentry_marker",
        }
    )
    _BOOLEAN_KEYS = frozenset({"optimistic_single_retrieve", "localize_references"})

    @staticmethod
    def from_yaml(path: Path) -> HandlerConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(path_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> HandlerConfig:
        """Create a validated config from `CRMHANDLERS_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        defaults = HandlerConfig()
        normalizer_mode = (
            normalize_optional_string(env_map.get("CRMHANDLERS_NORMALIZER_MODE"))
            or defaults.normalizer_mode
        )
        export_message_name = (
            normalize_optional_string(env_map.get("CRMHANDLERS_EXPORT_MESSAGE"))
            or defaults.export_message_name
        )
        optimistic = ConfigLoader._optional_env_boolean(
            env_map, "CRMHANDLERS_OPTIMISTIC_RETRIEVE", defaults.optimistic_single_retrieve
        )
        localize_references = ConfigLoader._optional_env_boolean(
            env_map, "CRMHANDLERS_LOCALIZE_REFERENCES", defaults.localize_references
        )
        locale_override = parse_optional_locale_id(
            env_map.get("CRMHANDLERS_LOCALE"), "CRMHANDLERS_LOCALE"
        )
        reentry_marker = (
            normalize_optional_string(env_map.get("CRMHANDLERS_REENTRY_MARKER"))
            or defaults.reentry_marker
        )

        config = HandlerConfig(
            normalizer_mode=normalizer_mode,
            export_message_name=export_message_name,
            optimistic_single_retrieve=optimistic,
            localize_references=localize_references,
            locale_override=locale_override,
            reentry_marker=reentry_marker,
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> HandlerConfig:
        """Build a validated config from a parsed mapping payload."""

        unknown = sorted(str(key) for key in payload if key not in ConfigLoader._SUPPORTED_YAML_KEYS)
        if unknown:
            raise ValueError(f"{source_label} has unsupported key(s): {', '.join(unknown)}.")

        values: dict[str, Any] = {}
        for key in ("normalizer_mode", "export_message_name", "reentry_marker"):
            if key in payload:
                text = normalize_optional_string(payload[key])
                if text is None:
                    raise ValueError(f"`{key}` must be a non-empty string.")
                values[key] = text
        for key in ConfigLoader._BOOLEAN_KEYS:
            if key in payload:
                values[key] = parse_required_boolean(payload[key], key)
        if "locale_override" in payload:
            values["locale_override"] = parse_optional_locale_id(
                payload["locale_override"], "locale_override"
            )

        config = HandlerConfig(**values)
        config.validate()
        return config

    @staticmethod
    def _optional_env_boolean(env_map: Mapping[str, str], key: str, default: bool) -> bool:
        """Parse an optional boolean environment variable."""

        raw = normalize_optional_string(env_map.get(key))
        if raw is None:
            return default
        return parse_required_boolean(raw, key)
