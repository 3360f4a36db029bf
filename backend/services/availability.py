"""Slot generation for a doctor's working day.

Everything here is pure: no database access, no shared state. Times of day
travel as 24-hour ``HH:MM`` strings and are converted to minutes since
midnight for arithmetic.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from backend.core import config
from backend.services.errors import InvalidConfiguration, InvalidTimeFormat

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r'([0-1]?[0-9]|2[0-3]):[0-5][0-9]')
MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class Slot:
    time: str
    display: str


@dataclass(frozen=True)
class WorkingWindow:
    start: str
    end: str
    slot_duration_minutes: int


def is_valid_time(value) -> bool:
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def time_to_minutes(value: str) -> int:
    if not is_valid_time(value):
        raise InvalidTimeFormat(f'Invalid time format: {value!r}. Expected HH:MM (24-hour).')

    hours, minutes = value.split(':')
    return int(hours) * MINUTES_PER_HOUR + int(minutes)


def minutes_to_time(minutes: int) -> str:
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f'{hours:02d}:{mins:02d}'


def normalize_time(value: str) -> str:
    """Return ``value`` zero-padded, e.g. ``9:05`` -> ``09:05``."""
    return minutes_to_time(time_to_minutes(value))


def format_time_display(value: str) -> str:
    hours, minutes = divmod(time_to_minutes(value), MINUTES_PER_HOUR)
    period = 'PM' if hours >= 12 else 'AM'
    display_hours = hours % 12 or 12
    return f'{display_hours}:{minutes:02d} {period}'


def _coerce_duration(value) -> int:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())

    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfiguration(f'Invalid consultation duration: {value!r}.')

    return value


def working_window_for(doctor) -> WorkingWindow:
    """Build the working window of a doctor record.

    Unset fields fall back to the configured defaults. A duration that is set
    but is not a positive whole number raises ``InvalidConfiguration``.
    """
    start = doctor.working_hours_start or config.DEFAULT_WORKING_HOURS_START
    end = doctor.working_hours_end or config.DEFAULT_WORKING_HOURS_END

    duration = doctor.consultation_duration
    if duration is None or duration == '':
        duration = config.DEFAULT_SLOT_DURATION_MINUTES

    return WorkingWindow(start=start, end=end, slot_duration_minutes=_coerce_duration(duration))


def compute_available_slots(window: WorkingWindow, booked: Iterable[str]) -> list[Slot]:
    current = time_to_minutes(window.start)
    end = time_to_minutes(window.end)
    duration = _coerce_duration(window.slot_duration_minutes)

    if current >= end:
        logger.warning('Empty working window: start %s is not before end %s', window.start, window.end)
        return []

    booked_times = {normalize_time(value) for value in booked if is_valid_time(value)}

    slots: list[Slot] = []
    while current + duration <= end:
        time_string = minutes_to_time(current)
        if time_string not in booked_times:
            slots.append(Slot(time=time_string, display=format_time_display(time_string)))
        current += duration

    logger.debug('Generated %d slots for %s-%s every %d min', len(slots), window.start, window.end, duration)
    return slots
