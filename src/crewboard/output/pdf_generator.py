"""PDF generation for board output.

This module creates printable availability boards showing:
- One grid per region, workers down the side and days across the top
- Per-day available hours, colored by the rule that produced them
- A long-leave page and a summary page
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from crewboard.domain.models import (
    AvailabilityBoard,
    AvailabilitySource,
    DayAvailability,
    WorkerAvailability,
)

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    AvailabilitySource.SCHEDULE: (0.4, 0.7, 0.4),  # Green
    AvailabilitySource.SEASONAL: (0.4, 0.4, 0.8),  # Blue
    AvailabilitySource.UNAVAILABLE: (0.9, 0.5, 0.5),  # Red
    AvailabilitySource.NONE: (0.95, 0.95, 0.95),  # Light gray
    "weekend": (0.88, 0.88, 0.88),
    "today": (1.0, 0.9, 0.5),  # Yellow
}


def _require_canvas():
    try:
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas, landscape(letter)


class PDFGenerator:
    """Generates printable PDF availability boards.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(board, "board.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        board: AvailabilityBoard,
        output_path: Union[str, Path],
        include_summary: bool = True,
    ) -> None:
        """Generate PDF board and save to file.

        Args:
            board: The board to render.
            output_path: Path to save the PDF.
            include_summary: Whether to include the summary page.
        """
        canvas, pagesize = _require_canvas()
        c = canvas.Canvas(str(output_path), pagesize=pagesize)
        self._draw(c, board, include_summary)
        c.save()

    def generate_to_buffer(
        self,
        board: AvailabilityBoard,
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        canvas, pagesize = _require_canvas()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=pagesize)
        self._draw(c, board, include_summary)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw(self, c, board: AvailabilityBoard, include_summary: bool) -> None:
        for state, workers in board.grouped_workers.by_state.items():
            self._draw_state_pages(c, board, state, workers)

        if board.grouped_workers.unavailable_workers:
            self._draw_long_leave_page(c, board)

        if include_summary:
            self._draw_summary_page(c, board)

        # reportlab needs at least one page
        grouped = board.grouped_workers
        if not (grouped.by_state or grouped.unavailable_workers or include_summary):
            self._draw_header(c, board, "No workers available")
            c.showPage()

    def _draw_state_pages(
        self,
        c,
        board: AvailabilityBoard,
        state: str,
        workers: list[WorkerAvailability],
    ) -> None:
        """Draw one region's grid, paginated by rows."""
        row_height = 16
        header_height = 60
        footer_height = 40
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(1, int(usable_height / row_height))

        grid_left = self.margin + 110  # Space for names
        grid_right = self.page_width - self.margin - 50  # Space for totals
        cell_width = (grid_right - grid_left) / max(1, len(board.days))

        total_pages = (len(workers) + rows_per_page - 1) // rows_per_page
        for page_start in range(0, len(workers), rows_per_page):
            page_workers = workers[page_start : page_start + rows_per_page]

            self._draw_header(c, board, f"{state} ({len(workers)} workers)")
            top = self.page_height - self.margin - header_height
            self._draw_day_axis(c, board, grid_left, top, cell_width)

            y = top - 10
            for availability in page_workers:
                y -= row_height
                self._draw_worker_row(
                    c, availability, grid_left, y, cell_width, row_height - 2
                )

            self._draw_legend(c, self.margin, self.margin + 10)

            page_num = (page_start // rows_per_page) + 1
            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"{state} - Page {page_num} of {total_pages}",
            )
            c.showPage()

    def _draw_header(self, c, board: AvailabilityBoard, subtitle: str) -> None:
        """Draw page header with window dates and title."""
        end = board.end_date or board.anchor_date
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Worker Availability - {board.anchor_date.strftime('%d %b %Y')} "
            f"to {end.strftime('%d %b %Y')}",
        )
        c.setFont("Helvetica", 10)
        c.drawString(self.margin, self.page_height - self.margin - 35, subtitle)

    def _draw_day_axis(
        self,
        c,
        board: AvailabilityBoard,
        x: float,
        y: float,
        cell_width: float,
    ) -> None:
        """Draw day numbers and weekday initials above the grid."""
        c.setFont("Helvetica", 6)
        for i, day in enumerate(board.days):
            cx = x + i * cell_width + cell_width / 2
            if day.is_today:
                c.setFillColorRGB(*COLORS["today"])
                c.rect(x + i * cell_width, y - 2, cell_width, 16, fill=1, stroke=0)
            c.setFillColorRGB(0, 0, 0)
            c.drawCentredString(cx, y + 7, day.day_number)
            c.drawCentredString(cx, y, day.day_name[0])

    def _draw_worker_row(
        self,
        c,
        availability: WorkerAvailability,
        x: float,
        y: float,
        cell_width: float,
        height: float,
    ) -> None:
        """Draw a single worker's row of day cells."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 8)
        c.drawString(self.margin, y + height / 2 - 3, availability.worker.name[:22])

        for i, day in enumerate(availability.days):
            cx = x + i * cell_width
            self._draw_cell(c, day, cx, y, cell_width, height)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 7)
        c.drawString(
            x + len(availability.days) * cell_width + 4,
            y + height / 2 - 3,
            f"{availability.total_assigned_hours:.0f}/{availability.total_available_hours:.0f}h",
        )

    def _draw_cell(
        self,
        c,
        day: DayAvailability,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        color = COLORS[day.source]
        if day.source == AvailabilitySource.NONE and day.day_of_week in (0, 6):
            color = COLORS["weekend"]
        c.setFillColorRGB(*color)
        c.setStrokeColorRGB(1, 1, 1)
        c.rect(x, y, width, height, fill=1, stroke=1)

        if day.is_available and width >= 12:
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 5)
            c.drawCentredString(x + width / 2, y + height / 2 - 2, f"{day.available_hours:g}")

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        items = [
            (AvailabilitySource.SCHEDULE, "Regular schedule"),
            (AvailabilitySource.SEASONAL, "Seasonal"),
            (AvailabilitySource.UNAVAILABLE, "Unavailable"),
            (AvailabilitySource.NONE, "Not available"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45

        for key, label in items:
            c.setFillColorRGB(*COLORS[key])
            c.setStrokeColorRGB(0, 0, 0)
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 90

    def _draw_long_leave_page(self, c, board: AvailabilityBoard) -> None:
        """List workers on long leave."""
        entries = board.grouped_workers.unavailable_workers
        self._draw_header(c, board, f"Long leave ({len(entries)})")

        y = self.page_height - self.margin - 70
        c.setFont("Helvetica", 10)
        for entry in entries:
            if y < self.margin + 20:
                c.showPage()
                self._draw_header(c, board, "Long leave (continued)")
                y = self.page_height - self.margin - 70
                c.setFont("Helvetica", 10)
            u = entry.unavailability
            c.drawString(self.margin + 20, y, entry.worker.name)
            c.drawString(
                self.margin + 200,
                y,
                f"{u.start_date.strftime('%d %b')} - {u.end_date.strftime('%d %b %Y')}",
            )
            c.drawString(self.margin + 360, y, u.reason or "")
            y -= 15

        c.showPage()

    def _draw_summary_page(self, c, board: AvailabilityBoard) -> None:
        """Draw summary page with hour totals per region."""
        summary = board.get_summary()
        self._draw_header(c, board, "Summary")

        y = self.page_height - self.margin - 70
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Overview")
        y -= 20

        c.setFont("Helvetica", 10)
        stats = [
            f"Window: {summary['window_days']} days",
            f"Workers on board: {summary['total_workers']}",
            f"Workers on long leave: {summary['long_leave_workers']}",
            f"Total available hours: {summary['total_available_hours']:.1f}",
            f"Total assigned hours: {summary['total_assigned_hours']:.1f}",
        ]
        for stat in stats:
            c.drawString(self.margin + 20, y, stat)
            y -= 15

        y -= 20
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "By Region")
        y -= 18

        c.setFont("Helvetica", 10)
        for state, totals in summary["hours_by_state"].items():
            c.drawString(
                self.margin + 20,
                y,
                f"{state}: {totals['workers']} workers, "
                f"{totals['available_hours']:.1f}h available, "
                f"{totals['assigned_hours']:.1f}h assigned",
            )
            y -= 15

        c.showPage()
