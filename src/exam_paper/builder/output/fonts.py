"""
Module: builder.output.fonts

Purpose:
    Process-wide font registration for the PDF renderer.
    Fonts are registered once, before the first render, and never
    reloaded afterwards.

Key Functions:
    - register_fonts(): Explicit one-time registration (call at startup)
    - active_font_family(): Family used by the renderer
    - reset_fonts(): Forget the active family (tests only)

Dependencies:
    - reportlab.pdfbase: TrueType registration

Used By:
    - builder.output.renderer: Font lookup
    - cli / host.preview_host: Startup registration
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontFamily:
    """Regular and bold face names as known to ReportLab."""

    regular: str
    bold: str


# Built-in PDF base-14 fonts, always available
BUILTIN_FAMILY = FontFamily(regular="Times-Roman", bold="Times-Bold")

# Candidate TrueType files, in preference order: (regular, bold, family name)
TTF_CANDIDATES = [
    ("arial.ttf", "arialbd.ttf", "Arial"),
    ("Arial.ttf", "Arial Bold.ttf", "Arial"),
    ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf", "DejaVuSans"),
]

SEARCH_DIRECTORIES: List[Path] = [
    Path("/usr/share/fonts/truetype/dejavu"),
    Path("/usr/share/fonts/truetype/msttcorefonts"),
    Path("/usr/share/fonts"),
    Path("/Library/Fonts"),
    Path("C:/Windows/Fonts"),
]

_lock = threading.Lock()
_active: Optional[FontFamily] = None


def register_fonts(
    font_dir: Optional[Path] = None,
    *,
    search_system: bool = False,
) -> FontFamily:
    """
    Register the renderer font family. Idempotent.

    Looks for a TrueType family in font_dir (and the system font
    directories when search_system is True). Falls back to the built-in
    Times family when none is found or a file cannot be parsed.
    The first call wins; later calls return the already active family.

    Args:
        font_dir: Directory holding .ttf files
        search_system: Also search well-known system font directories

    Returns:
        The active FontFamily

    Example:
        >>> register_fonts().regular
        'Times-Roman'
    """
    global _active

    with _lock:
        if _active is not None:
            logger.debug(f"Fonts already registered ({_active.regular}), skipping")
            return _active

        directories: List[Path] = []
        if font_dir is not None:
            directories.append(Path(font_dir))
        if search_system:
            directories.extend(SEARCH_DIRECTORIES)

        family = _register_first_available(directories) or BUILTIN_FAMILY
        _active = family
        logger.info(f"Registered renderer font family: {family.regular}")
        return family


def active_font_family() -> FontFamily:
    """
    Family used by the renderer.

    Registers the built-in family when register_fonts() was never called.
    """
    if _active is None:
        logger.debug("register_fonts() not called before first render, using built-in fonts")
        return register_fonts()
    return _active


def reset_fonts() -> None:
    """Forget the active family so the next registration runs again."""
    global _active
    with _lock:
        _active = None


def _register_first_available(directories: Iterable[Path]) -> Optional[FontFamily]:
    for directory in directories:
        if not directory.is_dir():
            continue
        for regular_name, bold_name, family_name in TTF_CANDIDATES:
            regular_path = directory / regular_name
            if not regular_path.exists():
                continue
            try:
                pdfmetrics.registerFont(TTFont(family_name, str(regular_path)))
                bold_face = family_name
                bold_path = directory / bold_name
                if bold_path.exists():
                    bold_face = f"{family_name}-Bold"
                    pdfmetrics.registerFont(TTFont(bold_face, str(bold_path)))
            except Exception as e:
                logger.warning(f"Could not register font {regular_path}: {e}")
                continue
            return FontFamily(regular=family_name, bold=bold_face)
    return None
