"""Top-level package for crmhandlers.

This package provides two host pipeline handlers for a CRM platform: one that
strips HTML from rich-text attributes before an Excel export, and one that
substitutes localized display names into retrieved records. The entry points
are `ExcelRichTextHandler` and `MultilingualNameHandler`.
"""

__version__ = "0.1.0"

from .plugins import ExcelRichTextHandler, MultilingualNameHandler

__all__ = ["ExcelRichTextHandler", "MultilingualNameHandler", "__version__"]
