"""Draw composed sheets onto a ReportLab canvas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from reportlab.pdfgen.canvas import Canvas

from .pdf_constants import DEBUG_PAGINATION
from .pdf_measure import ReportlabMeasurer
from .pdf_settings import BookSettings, PageGeometry
from .pdf_types import PageSlot, Sheet, SheetSide, Side


@dataclass(slots=True)
class RenderContext:
    """Shared inputs for drawing every sheet side.

    Args:
        geometry: Page geometry.
        settings: Settings supplying running headers and debug outlines.
        measurer: Measurer for the registered font.
    """

    geometry: PageGeometry
    settings: BookSettings
    measurer: ReportlabMeasurer

    @property
    def font_name(self) -> str:
        return self.measurer.font_name


def _debug(*, msg: str) -> None:
    if DEBUG_PAGINATION:
        print(msg)


def _baseline(ctx: RenderContext, *, top: float, font_size: float) -> float:
    """Convert a top-down offset to a ReportLab baseline y.

    Args:
        ctx: Render context.
        top: Offset from the top of the sheet.
        font_size: Font size of the text.
    Returns:
        Baseline y measured up from the bottom of the sheet.
    """

    return ctx.geometry.page_height - top - ctx.measurer.ascent(font_size)


def _draw_page_number(canvas: Canvas, ctx: RenderContext, *, slot: PageSlot) -> None:
    geometry = ctx.geometry
    label = str(slot.number)
    size = geometry.header_font_size
    y = _baseline(ctx, top=geometry.header_margin_y, font_size=size)
    canvas.setFont(ctx.font_name, size)
    if slot.side is Side.LEFT:
        canvas.drawString(geometry.header_margin_x, y, label)
    else:
        canvas.drawRightString(geometry.page_width - geometry.header_margin_x, y, label)


def _draw_running_header(canvas: Canvas, ctx: RenderContext, *, slot: PageSlot) -> None:
    geometry = ctx.geometry
    if slot.side is Side.LEFT:
        text, center = ctx.settings.header_left, geometry.header_center_left_x
    else:
        text, center = ctx.settings.header_right, geometry.header_center_right_x
    if not text:
        return
    size = geometry.header_font_size
    canvas.setFont(ctx.font_name, size)
    canvas.drawCentredString(center, _baseline(ctx, top=geometry.header_margin_y, font_size=size), text)


def draw_content_boxes(canvas: Canvas, geometry: PageGeometry) -> None:
    """Outline both content blocks and the sheet's center line.

    Args:
        canvas: Target canvas.
        geometry: Page geometry.
    Returns:
        None.
    """

    bottom = geometry.page_height - geometry.content_bottom
    canvas.saveState()
    canvas.setLineWidth(0.5)
    for left_page in (True, False):
        canvas.rect(
            geometry.content_left_x(left_page=left_page),
            bottom,
            geometry.content_block_width,
            geometry.content_block_height,
            stroke=1,
            fill=0,
        )
    canvas.line(geometry.page_divider, 0, geometry.page_divider, geometry.page_height)
    canvas.restoreState()


def render_slot(canvas: Canvas, ctx: RenderContext, *, slot: PageSlot) -> None:
    """Draw one logical page and, unless it opens a chapter, its furniture.

    Args:
        canvas: Target canvas.
        ctx: Render context.
        slot: Slot to draw; absent and blank pages draw nothing.
    Returns:
        None.
    """

    if slot.page is None or slot.page.is_empty:
        return
    _debug(msg=f"rendering {slot.side.value} page {slot.number}")
    for line in slot.page.lines:
        canvas.setFont(ctx.font_name, line.font_size)
        canvas.drawString(line.x, _baseline(ctx, top=line.y, font_size=line.font_size), line.text)
    if slot.draws_furniture(ctx.geometry.content_font_size):
        _draw_page_number(canvas, ctx, slot=slot)
        _draw_running_header(canvas, ctx, slot=slot)


def render_sheet_side(canvas: Canvas, ctx: RenderContext, *, sheet_side: SheetSide) -> None:
    """Draw both halves of a sheet side and finish the PDF page."""

    for slot in sheet_side.slots():
        render_slot(canvas, ctx, slot=slot)
    if ctx.settings.show_content_margins:
        draw_content_boxes(canvas, ctx.geometry)
    canvas.showPage()


def render_sheets(canvas: Canvas, ctx: RenderContext, *, sheets: Iterable[Sheet]) -> int:
    """Draw every sheet, two PDF pages per sheet.

    Args:
        canvas: Target canvas.
        ctx: Render context.
        sheets: Sheets from ``compose``.
    Returns:
        Number of sheets drawn.
    """

    count = 0
    for sheet in sheets:
        for sheet_side in sheet.sides():
            render_sheet_side(canvas, ctx, sheet_side=sheet_side)
        count += 1
    return count
