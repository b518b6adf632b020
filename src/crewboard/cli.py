"""Command-line interface for the crewboard availability tool."""

import argparse
import sys
from datetime import date, datetime, timedelta
from typing import Optional

from crewboard.domain.models import (
    Booking,
    InputError,
    RecurringScheduleEntry,
    SeasonalOverride,
    UnavailabilityRange,
    Worker,
)
from crewboard.engine.board import BoardAssembler, create_board_assembler
from crewboard.engine.status import sort_by_availability
from crewboard.engine.window import BOARD_WINDOW_DAYS, TV_WINDOW_DAYS, sunday_weekday
from crewboard.loader import BoardInput, load_input
from crewboard.logging_setup import configure_logging
from crewboard.output.debug_generator import DebugGenerator
from crewboard.output.pdf_generator import PDFGenerator
from crewboard.validation.validator import InputValidator


def create_sample_input(count: int = 10, anchor_date: Optional[date] = None) -> BoardInput:
    """Create sample board input for demos.

    Args:
        count: Number of workers to create.
        anchor_date: First day the sample data is built around. Defaults to today.
    """
    if anchor_date is None:
        anchor_date = date.today()

    names = [
        ("Alice", "Nguyen"), ("Bob", "Smith"), ("Carol", "Jones"), ("David", "Brown"),
        ("Eve", "Wilson"), ("Frank", "Taylor"), ("Grace", "Lee"), ("Henry", "Walker"),
        ("Ivy", "Hall"), ("Jack", "Young"), ("Kate", "King"), ("Leo", "Wright"),
    ]
    regions = ["NSW", "VIC", "QLD", None]

    data = BoardInput()
    for i in range(count):
        first, last = names[i % len(names)]
        if i >= len(names):
            first = f"{first}{i // len(names) + 1}"
        worker = Worker(
            id=f"W{i + 1:03d}",
            first_name=first,
            last_name=last,
            region=regions[i % len(regions)],
        )
        data.workers.append(worker)

        if i % 4 != 3:
            # Weekdays, varying start times
            start_hour = 7 + i % 3
            for day_of_week in range(1, 6):
                data.schedules.append(
                    RecurringScheduleEntry(
                        worker_id=worker.id,
                        day_of_week=day_of_week,
                        start_time=f"{start_hour:02d}:00:00",
                        end_time=f"{start_hour + 8:02d}:00:00",
                    )
                )
        else:
            # Casual worker: seasonal days only
            for offset in range(2, 20, 5):
                data.overrides.append(
                    SeasonalOverride(
                        worker_id=worker.id,
                        override_date=anchor_date + timedelta(days=offset),
                        tokens=["morning", "afternoon"] if offset % 2 else ["anytime"],
                    )
                )

        if i % 6 == 0:
            data.unavailability.append(
                UnavailabilityRange(
                    worker_id=worker.id,
                    start_date=anchor_date + timedelta(days=3),
                    end_date=anchor_date + timedelta(days=5),
                    reason="Appointment",
                )
            )
        if i % 9 == 8:
            data.unavailability.append(
                UnavailabilityRange(
                    worker_id=worker.id,
                    start_date=anchor_date - timedelta(days=2),
                    end_date=anchor_date + timedelta(days=14),
                    reason="Annual leave",
                )
            )

    # A booking for every second scheduled worker on each weekday
    for offset in range(14):
        d = anchor_date + timedelta(days=offset)
        if sunday_weekday(d) in (0, 6):
            continue
        start = datetime.combine(d, datetime.min.time()).replace(hour=9)
        data.bookings.append(
            Booking(
                start_time=start,
                end_time=start + timedelta(hours=3),
                worker_ids=[w.id for w in data.workers[::2]],
                id=f"B{offset:03d}",
            )
        )

    return data


def print_board_summary(board) -> None:
    """Print a short summary of a board to stdout."""
    summary = board.get_summary()
    print(f"\nAvailability board: {board.anchor_date} to {board.end_date}")
    print(f"  Window: {summary['window_days']} days")
    print(f"  Workers on board: {summary['total_workers']}")
    print(f"  Available hours: {summary['total_available_hours']:.1f}")
    print(f"  Assigned hours: {summary['total_assigned_hours']:.1f}")

    print(f"\nBy region:")
    for state, totals in summary["hours_by_state"].items():
        print(f"  {state}: {totals['workers']} workers, "
              f"{totals['available_hours']:.1f}h available, "
              f"{totals['assigned_hours']:.1f}h assigned")

    unavailable = board.grouped_workers.unavailable_workers
    if unavailable:
        print(f"\nLong leave ({len(unavailable)}):")
        for entry in unavailable:
            u = entry.unavailability
            reason = f" - {u.reason}" if u.reason else ""
            print(f"  {entry.worker.name}: {u.start_date} to {u.end_date}{reason}")


def write_outputs(board, debug_path: Optional[str], pdf_path: Optional[str]) -> None:
    if debug_path:
        DebugGenerator().generate(board, debug_path)
        print(f"\nText board written to {debug_path}")
    if pdf_path:
        print(f"\nGenerating PDF: {pdf_path}")
        PDFGenerator().generate(board, pdf_path)
        print("  PDF created successfully!")


def run_validation(data: BoardInput) -> bool:
    """Validate input and print problems. Returns True if valid."""
    result = InputValidator().validate(*data.as_args())
    if result.is_valid:
        print("Validation: PASSED")
    else:
        print(f"Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:10]:
            print(f"    - {error}")
        if len(result.errors) > 10:
            print(f"    ... and {len(result.errors) - 10} more errors")
    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings[:5]:
            print(f"    - {warning}")
        if len(result.warnings) > 5:
            print(f"    ... and {len(result.warnings) - 5} more warnings")
    return result.is_valid


def run_board(
    input_path: str,
    days: int,
    anchor: Optional[date],
    debug_path: Optional[str] = None,
    pdf_path: Optional[str] = None,
    validate: bool = False,
    clamp_negative_hours: bool = False,
) -> int:
    """Build a rolling availability board from a JSON input file."""
    data = load_input(input_path)

    if validate and not run_validation(data):
        return 1

    assembler = create_board_assembler(
        window_days=days,
        clamp_negative_hours=clamp_negative_hours,
    )
    board = assembler.assemble(*data.as_args(), anchor_date=anchor or date.today())

    print_board_summary(board)
    write_outputs(board, debug_path, pdf_path)
    return 0


def run_month(input_path: str, month: date) -> int:
    """Print per-worker totals for a calendar month."""
    data = load_input(input_path)
    rows = BoardAssembler().assemble_month(*data.as_args(), month_date=month)

    print(f"\nMonth view: {month.strftime('%B %Y')} ({len(rows)} workers)")
    print(f"  {'Worker':<24} {'Region':<10} {'Avail':>7} {'Assigned':>9} {'Off':>4}")
    for row in rows:
        off_days = sum(1 for d in row.days if d.is_unavailable)
        print(f"  {row.worker.name[:24]:<24} {row.worker.region or '':<10} "
              f"{row.total_available_hours:>6.1f}h {row.total_assigned_hours:>8.1f}h "
              f"{off_days:>4}")
    return 0


def run_week_status(input_path: str, week_of: date) -> int:
    """Print workers sorted by weekly availability."""
    data = load_input(input_path)
    workers = [w for w in data.workers if w.is_active]
    statuses = sort_by_availability(workers, data.schedules, data.unavailability, week_of)

    print(f"\nWeekly availability for week of {week_of}:")
    for status in statuses:
        reason = f" - {status.reason}" if status.reason else ""
        print(f"  {status.worker.name:<24} {status.status.value:<12}{reason}")
    return 0


def run_demo(count: int = 10, days: int = BOARD_WINDOW_DAYS, debug_path: Optional[str] = None,
             pdf_path: Optional[str] = None) -> int:
    """Run a demo board on generated sample data."""
    print(f"Generating demo board for {count} workers over {days} days...")

    anchor = date.today()
    data = create_sample_input(count, anchor)
    board = create_board_assembler(window_days=days).assemble(*data.as_args(), anchor_date=anchor)

    print_board_summary(board)
    write_outputs(board, debug_path, pdf_path)
    if not debug_path:
        print()
        print(DebugGenerator().generate_to_string(board))
    return 0


def _parse_date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)")


def _parse_month_arg(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month '{value}' (expected YYYY-MM)")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="crewboard - Worker Availability Board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s board input.json                 30-day board from today
  %(prog)s board input.json --tv            60-day wall display board
  %(prog)s board input.json --anchor 2024-01-15 --output board.pdf
  %(prog)s board input.json --validate      Reject duplicate/inverted rows

  %(prog)s month input.json --month 2024-02 Month totals per worker
  %(prog)s week-status input.json           Workers sorted by this week's availability

  %(prog)s demo --count 20                  Board from generated sample data
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug details (duplicate rows, orphaned bookings)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Board command
    board_parser = subparsers.add_parser("board", help="Build a rolling availability board")
    board_parser.add_argument("input", help="JSON input file")
    window_group = board_parser.add_mutually_exclusive_group()
    window_group.add_argument(
        "--days", "-d",
        type=int,
        default=BOARD_WINDOW_DAYS,
        help=f"Number of days in the window (default: {BOARD_WINDOW_DAYS})",
    )
    window_group.add_argument(
        "--tv",
        action="store_true",
        help=f"Use the {TV_WINDOW_DAYS}-day wall display window",
    )
    board_parser.add_argument(
        "--anchor", "-a",
        type=_parse_date_arg,
        help="First day of the window (default: today)",
    )
    board_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")
    board_parser.add_argument("--debug", type=str, help="Output text board file path")
    board_parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate input first and stop on errors",
    )
    board_parser.add_argument(
        "--clamp-negative-hours",
        action="store_true",
        help="Count schedule windows that end before they start as 0 hours",
    )

    # Month command
    month_parser = subparsers.add_parser("month", help="Per-worker totals for a calendar month")
    month_parser.add_argument("input", help="JSON input file")
    month_parser.add_argument(
        "--month", "-m",
        type=_parse_month_arg,
        default=date.today().replace(day=1),
        help="Month as YYYY-MM (default: current month)",
    )

    # Week status command
    week_parser = subparsers.add_parser("week-status", help="Workers sorted by weekly availability")
    week_parser.add_argument("input", help="JSON input file")
    week_parser.add_argument(
        "--week-of", "-w",
        type=_parse_date_arg,
        default=date.today(),
        help="Any date in the week (default: today)",
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run a demo board on sample data")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=10,
        help="Number of workers to generate (default: 10)",
    )
    demo_parser.add_argument(
        "--days", "-d",
        type=int,
        default=BOARD_WINDOW_DAYS,
        help=f"Number of days in the window (default: {BOARD_WINDOW_DAYS})",
    )
    demo_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")
    demo_parser.add_argument("--debug", type=str, help="Output text board file path")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "board":
            days = TV_WINDOW_DAYS if args.tv else args.days
            return run_board(
                args.input,
                days,
                args.anchor,
                debug_path=args.debug,
                pdf_path=args.output,
                validate=args.validate,
                clamp_negative_hours=args.clamp_negative_hours,
            )
        elif args.command == "month":
            return run_month(args.input, args.month)
        elif args.command == "week-status":
            return run_week_status(args.input, args.week_of)
        elif args.command == "demo":
            return run_demo(args.count, args.days, args.debug, args.output)
        else:
            parser.print_help()
            return 1
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
