"""Worker availability board: resolves schedules, leave, seasonal overrides and bookings."""

__version__ = "0.1.0"
