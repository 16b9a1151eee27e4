"""Export adapters for the rendered résumé preview."""
from resume_builder.export.dom import ExportError, find_target
from resume_builder.export.pdf_renderer import export_pdf, paginate
from resume_builder.export.word_export import WORD_CONTENT_TYPE, export_word, word_filename

__all__ = [
    "ExportError",
    "WORD_CONTENT_TYPE",
    "export_pdf",
    "export_word",
    "find_target",
    "paginate",
    "word_filename",
]
