"""
Exam Paper Core Package

Shared data models: the question record handed over by question
selection, the header metadata edited in the preview form, the layout
mode and the snapshot that ties them together for one render cycle.
"""

from .models import Question, HeaderMetadata, LayoutMode, ExportSnapshot

__all__ = [
    "Question",
    "HeaderMetadata",
    "LayoutMode",
    "ExportSnapshot",
]
