"""Availability resolution engine."""

from crewboard.engine.board import BoardAssembler, BoardConfig, create_board_assembler
from crewboard.engine.resolver import AvailabilityResolver, WorkerIndex
from crewboard.engine.status import (
    AvailabilityStatus,
    WeeklyStatus,
    sort_by_availability,
    weekly_status,
)
from crewboard.engine.window import (
    BOARD_WINDOW_DAYS,
    TV_WINDOW_DAYS,
    generate_month_window,
    generate_window,
)
from crewboard.engine.workload import WorkloadAggregator

__all__ = [
    # Board assembly
    "BoardAssembler",
    "BoardConfig",
    "create_board_assembler",
    # Resolution
    "AvailabilityResolver",
    "WorkerIndex",
    "WorkloadAggregator",
    # Window
    "BOARD_WINDOW_DAYS",
    "TV_WINDOW_DAYS",
    "generate_month_window",
    "generate_window",
    # Weekly status
    "AvailabilityStatus",
    "WeeklyStatus",
    "sort_by_availability",
    "weekly_status",
]
