"""
Module: layout_mode

Purpose:
    Enum of page layout modes. Only two modes exist.

Key Classes:
    - LayoutMode: VERTICAL / HORIZONTAL

Used By:
    - builder.layout.engine: Flow style and grid slots
    - host.preview_host: Radio selection state
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class LayoutMode(Enum):
    """
    Controls how question blocks flow on the page.

    Attributes:
        VERTICAL: Blocks stack top-to-bottom in a single column.
        HORIZONTAL: Blocks flow left-to-right, two per row, justified
                    to fill the page width.

    Example:
        >>> LayoutMode.parse("Horizontal")
        <LayoutMode.HORIZONTAL: 'horizontal'>
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: Union[str, LayoutMode]) -> LayoutMode:
        """
        Parse a layout mode from its form value.

        Raises:
            ValueError: If value is not a known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"layout must be one of {[m.value for m in cls]}: {value!r}"
            ) from None
