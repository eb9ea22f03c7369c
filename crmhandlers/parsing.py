"""Token parsing for values read from YAML config files and `CRMHANDLERS_*` variables."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Return the trimmed text of a config value, or `None` for blank or missing values."""

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Read a YAML boolean or a switch token such as `yes`/`off`; `None` if unrecognized."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_required_boolean(value: object, field_name: str) -> bool:
    """Read a handler switch such as `localize_references`.

    Raises:
        ValueError: If the value is not a recognized on/off token.
    """

    parsed = parse_permissive_boolean(value)
    if parsed is not None:
        return parsed

    raise ValueError(
        f"`{field_name}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
    )


def parse_optional_locale_id(value: object, field_name: str) -> int | None:
    """Read a UI language id such as `1036`; blank values mean no override.

    Raises:
        ValueError: If the value is present but not a positive integer.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive integer locale id.")
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            return None
        try:
            parsed = int(normalized)
        except ValueError as exc:
            raise ValueError(
                f"`{field_name}` must be a positive integer locale id."
            ) from exc
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer locale id.")
    return parsed
