"""
Core Models Package

Immutable data models shared by the composer, the exporter and the
preview host. All models are frozen dataclasses (or enums) so a snapshot
can be handed to concurrent renders without copying.
"""

from .questions import Question
from .header import HeaderMetadata
from .layout_mode import LayoutMode
from .snapshot import ExportSnapshot

__all__ = [
    "Question",
    "HeaderMetadata",
    "LayoutMode",
    "ExportSnapshot",
]
