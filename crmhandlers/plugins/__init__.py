"""Host pipeline handlers."""

from .excel_rich_text import ExcelRichTextHandler, is_export_to_excel
from .multilingual import MultilingualNameHandler

__all__ = ["ExcelRichTextHandler", "MultilingualNameHandler", "is_export_to_excel"]
