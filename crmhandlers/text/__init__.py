"""Text normalization components.

This package provides the deterministic HTML-to-plain-text cleanup applied to
rich-text attribute values.
"""

from .html import (
    CollapseWhitespace,
    DecodeEntities,
    FlattenLineBreaks,
    HtmlNormalizer,
    InsertLineBreaks,
    RemoveElementBlock,
    StripTags,
    TrimEdges,
    normalize,
)

__all__ = [
    "HtmlNormalizer",
    "normalize",
    "FlattenLineBreaks",
    "CollapseWhitespace",
    "RemoveElementBlock",
    "DecodeEntities",
    "InsertLineBreaks",
    "StripTags",
    "TrimEdges",
]
