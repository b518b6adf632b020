"""Plain-text board output.

This module renders an availability board as fixed-width text:
- One section per region with a per-day cell code for every worker
- Hour totals per worker and per region
- The long-leave list
"""

from pathlib import Path
from typing import Union

from crewboard.domain.models import (
    AvailabilityBoard,
    AvailabilitySource,
    DayAvailability,
    WorkerAvailability,
)

# One character per day
CELL_CODES = {
    AvailabilitySource.SCHEDULE: "#",
    AvailabilitySource.SEASONAL: "S",
    AvailabilitySource.UNAVAILABLE: "x",
    AvailabilitySource.NONE: ".",
}


class DebugGenerator:
    """Generates text output for an availability board.

    Example:
        >>> generator = DebugGenerator()
        >>> print(generator.generate_to_string(board))
    """

    def generate(self, board: AvailabilityBoard, output_path: Union[str, Path]) -> str:
        """Generate text output and save to file.

        Args:
            board: The board to render.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(board)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(self, board: AvailabilityBoard) -> str:
        """Generate text output and return as string."""
        return self._generate_content(board)

    def _generate_content(self, board: AvailabilityBoard) -> str:
        """Generate the full text content."""
        lines = []
        grouped = board.grouped_workers

        lines.append("=" * 80)
        lines.append(f"AVAILABILITY BOARD - {board.anchor_date} (+{len(board.days)} days)")
        lines.append("=" * 80)
        lines.append("")

        summary = board.get_summary()
        lines.append(f"Workers on board: {summary['total_workers']}")
        lines.append(f"Workers on long leave: {summary['long_leave_workers']}")
        lines.append(f"Available hours: {summary['total_available_hours']:.1f}")
        lines.append(f"Assigned hours: {summary['total_assigned_hours']:.1f}")
        lines.append("")
        lines.append("Legend: # schedule  S seasonal  x unavailable  . none")
        lines.append("")

        header = "".join(
            "|" if d.day_of_week == 0 else ("*" if d.is_today else " ")
            for d in board.days
        )

        for state, workers in grouped.by_state.items():
            state_available = sum(w.total_available_hours for w in workers)
            state_assigned = sum(w.total_assigned_hours for w in workers)

            lines.append("-" * 80)
            lines.append(
                f"{state} ({len(workers)} workers, "
                f"{state_available:.1f}h available, {state_assigned:.1f}h assigned)"
            )
            lines.append("-" * 80)
            lines.append(f"{'':<22} {header}")
            for availability in workers:
                lines.append(self._worker_line(availability))
            lines.append("")

        if grouped.unavailable_workers:
            lines.append("-" * 80)
            lines.append("LONG LEAVE")
            lines.append("-" * 80)
            for entry in grouped.unavailable_workers:
                reason = entry.unavailability.reason or "No reason given"
                lines.append(
                    f"  {entry.worker.name:<22} {entry.unavailability.start_date} to "
                    f"{entry.unavailability.end_date}  {reason}"
                )
            lines.append("")

        lines.append("=" * 80)
        lines.append("END OF BOARD")
        lines.append("=" * 80)

        return "\n".join(lines)

    def _worker_line(self, availability: WorkerAvailability) -> str:
        name = availability.worker.name[:22]
        cells = "".join(self._cell(day) for day in availability.days)
        return (
            f"{name:<22} {cells}  "
            f"{availability.total_available_hours:>6.1f}h / "
            f"{availability.total_assigned_hours:.1f}h"
        )

    def _cell(self, day: DayAvailability) -> str:
        return CELL_CODES[day.source]
