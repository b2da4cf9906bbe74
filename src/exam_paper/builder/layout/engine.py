"""
Module: builder.layout.engine

Purpose:
    Map a layout mode to the flow style of the question area and a
    question index to its grid slot. Pure and total over LayoutMode.

Key Functions:
    - flow_style(): Style descriptor for a mode
    - slot_for(): Grid slot of the question at an index

Used By:
    - builder.layout.composer: Style and slot of every block
    - builder.output.renderer: Block positions on the page
"""

from __future__ import annotations

from exam_paper.core.models import LayoutMode

from .models import FlowDirection, FlowStyle, Justify, Slot


VERTICAL_STYLE = FlowStyle(
    direction=FlowDirection.COLUMN,
    wrap=True,
    justify=Justify.FLEX_START,
    columns=1,
)

HORIZONTAL_STYLE = FlowStyle(
    direction=FlowDirection.ROW,
    wrap=True,
    justify=Justify.SPACE_BETWEEN,
    columns=2,
)


def flow_style(mode: LayoutMode) -> FlowStyle:
    """
    Get the flow style for a layout mode.

    Args:
        mode: Layout mode

    Returns:
        VERTICAL: column flow, blocks stack top-to-bottom.
        HORIZONTAL: row flow, blocks wrap left-to-right, space-between.

    Raises:
        ValueError: If mode is not a LayoutMode member

    Example:
        >>> flow_style(LayoutMode.HORIZONTAL).columns
        2
    """
    if mode is LayoutMode.VERTICAL:
        return VERTICAL_STYLE
    if mode is LayoutMode.HORIZONTAL:
        return HORIZONTAL_STYLE
    raise ValueError(f"Unsupported layout mode: {mode!r}")


def slot_for(mode: LayoutMode, index: int) -> Slot:
    """
    Get the grid slot of the question at a 0-based index.

    Example:
        >>> slot_for(LayoutMode.HORIZONTAL, 3)
        Slot(row=1, column=1)
    """
    if index < 0:
        raise ValueError(f"index must be non-negative: {index}")
    columns = flow_style(mode).columns
    return Slot(row=index // columns, column=index % columns)
