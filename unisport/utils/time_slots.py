"""
Helpers for the "HH:MM" time strings stored on bookings.

Booking conflicts are evaluated at whole-hour resolution: minutes are
truncated, so "09:30" and "09:00" are the same hour.
"""

from typing import List, Tuple

from unisport.exceptions import InvalidRequestError


def parse_hour(time_str: str) -> int:
    """
    Returns the hour component of a "HH:MM" (or bare "HH") string.

    Raises:
        InvalidRequestError: if the string is not a valid time of day
    """
    try:
        parts = time_str.strip().split(":")
        hour = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except (ValueError, AttributeError):
        raise InvalidRequestError(f"Invalid time value: {time_str!r}")

    if len(parts) > 2 or not 0 <= hour <= 24 or not 0 <= minutes < 60:
        raise InvalidRequestError(f"Invalid time value: {time_str!r}")
    if hour == 24 and minutes:
        raise InvalidRequestError(f"Invalid time value: {time_str!r}")
    return hour


def normalize_time(time_str: str) -> str:
    """Pads a time string to "HH:MM"; bare hours become "HH:00"."""
    parse_hour(time_str)
    parts = time_str.strip().split(":")
    minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    return f"{int(parts[0]):02d}:{minutes:02d}"


def hour_to_time_string(hour: int) -> str:
    return f"{hour:02d}:00"


def parse_selected_times(selected_times: str) -> List[Tuple[str, str]]:
    """
    Splits a comma-separated list of "start-end" pairs, e.g. "09-10,10-11",
    into normalized ("09:00", "10:00") tuples.

    Raises:
        InvalidRequestError: on an empty list or a pair without both ends
    """
    slots = []
    for raw_slot in selected_times.split(","):
        raw_slot = raw_slot.strip()
        if not raw_slot:
            continue
        parts = raw_slot.split("-")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise InvalidRequestError(f"Malformed time slot: {raw_slot!r}")
        slots.append((normalize_time(parts[0]), normalize_time(parts[1])))

    if not slots:
        raise InvalidRequestError("No time slots selected")
    return slots


def duration_hours(start_time: str, end_time: str) -> int:
    return parse_hour(end_time) - parse_hour(start_time)


def slots_overlap(
    booking_start: int, booking_end: int, new_start: int, new_end: int
) -> bool:
    """
    True if the requested range [new_start, new_end) clashes with an
    existing booking [booking_start, booking_end), all values in hours.

    A clash is any of:
    - the new start falls inside the existing booking
    - the new end falls inside the existing booking
    - the new booking fully contains the existing one
    """
    return (
        (booking_start <= new_start < booking_end)
        or (booking_start < new_end <= booking_end)
        or (new_start <= booking_start and new_end >= booking_end)
    )
