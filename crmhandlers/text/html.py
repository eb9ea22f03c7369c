"""Deterministic HTML-to-plain-text normalization rules.

Responsibilities:
- Provide composable cleanup rules for rich-text attribute values.
- Keep the rule order fixed, since later rules read the output of earlier ones.
- Offer the earlier strip-then-decode behavior as a `legacy` mode.

The rules are a best-effort textual cleanup, not an HTML parser: a stray `<`
followed later by a `>` swallows the text between them, and an unterminated
`<` is left untouched.
"""

from __future__ import annotations

import re
from typing import Protocol

NORMALIZER_MODE_FULL = "full"
NORMALIZER_MODE_LEGACY = "legacy"
SUPPORTED_NORMALIZER_MODES = frozenset({NORMALIZER_MODE_FULL, NORMALIZER_MODE_LEGACY})

LINE_BREAK = "\n"

# Applied in order by literal substitution; `&amp;` precedes `&lt;` so
# `&amp;lt;` decodes all the way to `<`.
ENTITY_TABLE: tuple[tuple[str, str], ...] = (
    ("&nbsp;", "\u00a0"),
    ("&#160;", "\u00a0"),
    ("&amp;", "&"),
    ("&#38;", "&"),
    ("&quot;", '"'),
    ("&#34;", '"'),
    ("&lt;", "<"),
    ("&#60;", "<"),
    ("&gt;", ">"),
    ("&#62;", ">"),
    ("&apos;", "'"),
    ("&#39;", "'"),
    ("&cent;", "¢"),
    ("&#162;", "¢"),
    ("&pound;", "£"),
    ("&#163;", "£"),
    ("&yen;", "¥"),
    ("&#165;", "¥"),
    ("&euro;", "€"),
    ("&#8364;", "€"),
    ("&copy;", "©"),
    ("&#169;", "©"),
    ("&reg;", "®"),
    ("&#174;", "®"),
    ("&trade;", "™"),
    ("&#8482;", "™"),
    ("&bull;", "•"),
)

LEGACY_ENTITY_TABLE: tuple[tuple[str, str], ...] = tuple(
    (entity, " " if replacement == "\u00a0" else replacement)
    for entity, replacement in ENTITY_TABLE
    if entity != "&bull;"
)


class NormalizerRule(Protocol):
    """Protocol for HTML normalization rules."""

    def apply(self, text: str) -> str:
        """Apply a single normalization transformation."""


class FlattenLineBreaks:
    """Replace every newline and tab with a single space."""

    def apply(self, text: str) -> str:
        """Apply line-flattening rule."""

        return text.replace("\n", " ").replace("\t", " ")


class CollapseWhitespace:
    """Collapse every run of ASCII whitespace into a single space.

    Decoded non-breaking spaces are not whitespace here, so a second pass
    leaves them in place.
    """

    _WHITESPACE_RE = re.compile(r"[ \t\n\r\f\v]+")

    def apply(self, text: str) -> str:
        """Apply whitespace-collapsing rule."""

        return self._WHITESPACE_RE.sub(" ", text)


class RemoveElementBlock:
    """Remove whole `<tag>...</tag>` blocks, content included.

    Matching is case-insensitive, spans line boundaries and stops at the
    first closing tag.
    """

    def __init__(self, tag: str) -> None:
        """Initialize the rule for one element name, e.g. `head` or `script`."""

        self.tag = tag
        escaped = re.escape(tag)
        self._block_re = re.compile(
            rf"<{escaped}\b[^>]*>.*?</{escaped}\s*>",
            flags=re.IGNORECASE | re.DOTALL,
        )

    def apply(self, text: str) -> str:
        """Apply block-removal rule."""

        return self._block_re.sub("", text)


class DecodeEntities:
    """Decode a closed set of HTML entities by literal substitution."""

    def __init__(self, table: tuple[tuple[str, str], ...] = ENTITY_TABLE) -> None:
        """Initialize with an ordered entity-to-character table."""

        self.table = table

    def apply(self, text: str) -> str:
        """Replace each entity spelling in table order."""

        for entity, replacement in self.table:
            text = text.replace(entity, replacement)
        return text


class InsertLineBreaks:
    """Force a line break ahead of `<br>`, `<br ...>` and `<p ...>` tags."""

    _BOUNDARY_RE = re.compile(r"(?=<br>|<br |<p )")

    def apply(self, text: str) -> str:
        """Insert a line-break marker before each markup boundary."""

        return self._BOUNDARY_RE.sub(LINE_BREAK, text)


class StripTags:
    """Remove every `<...>` tag with no replacement."""

    def __init__(self, *, multiline: bool = True) -> None:
        """Initialize the scanner; `multiline=False` keeps tags within one line."""

        flags = re.DOTALL if multiline else 0
        self._tag_re = re.compile(r"<.*?>", flags=flags)

    def apply(self, text: str) -> str:
        """Apply tag-stripping rule."""

        return self._tag_re.sub("", text)


class TrimEdges:
    """Trim boundary line breaks and spaces; decoded `&nbsp;` stays."""

    def apply(self, text: str) -> str:
        """Apply edge-trimming rule."""

        return text.strip(" " + LINE_BREAK)


def default_rules() -> list[NormalizerRule]:
    """Return the full rule sequence in its required order."""

    return [
        FlattenLineBreaks(),
        CollapseWhitespace(),
        RemoveElementBlock("head"),
        RemoveElementBlock("script"),
        DecodeEntities(),
        InsertLineBreaks(),
        StripTags(),
        TrimEdges(),
    ]


def legacy_rules() -> list[NormalizerRule]:
    """Return the earlier strip-then-decode rule sequence."""

    return [
        StripTags(multiline=False),
        DecodeEntities(LEGACY_ENTITY_TABLE),
    ]


class HtmlNormalizer:
    """Apply a sequence of HTML normalization rules."""

    def __init__(self, rules: list[NormalizerRule] | None = None) -> None:
        """Initialize with custom rules or the full default sequence."""

        self.rules = rules or default_rules()

    @classmethod
    def for_mode(cls, mode: str) -> HtmlNormalizer:
        """Build a normalizer for `full` or `legacy` mode."""

        if mode == NORMALIZER_MODE_FULL:
            return cls(default_rules())
        if mode == NORMALIZER_MODE_LEGACY:
            return cls(legacy_rules())
        supported = ", ".join(sorted(SUPPORTED_NORMALIZER_MODES))
        raise ValueError(f"Unsupported normalizer mode `{mode}`; supported: {supported}.")

    def normalize(self, text: str | None) -> str:
        """Convert HTML markup and entities to plain text; never fails."""

        if not text:
            return ""
        current = text
        for rule in self.rules:
            current = rule.apply(current)
        return current


_DEFAULT_NORMALIZER = HtmlNormalizer()


def normalize(text: str | None) -> str:
    """Normalize rich text with the full default rule sequence."""

    return _DEFAULT_NORMALIZER.normalize(text)
