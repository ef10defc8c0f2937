from __future__ import annotations

from datetime import date

from geckotrack.domain.errors import ValidationError
from geckotrack.domain.models import CheckInStatus


def parse_date(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Invalid ISO date: {value!r}") from exc


def check_in_status(check_in_date: date | str | None, today: date | str) -> CheckInStatus:
    """Classify a scheduled check-in relative to ``today``.

    Past dates classify as NONE; they are never cleared from the profile.
    """
    if check_in_date is None:
        return CheckInStatus.NONE
    scheduled = parse_date(check_in_date)
    current = parse_date(today)
    if scheduled == current:
        return CheckInStatus.SCHEDULED_TODAY
    if scheduled > current:
        return CheckInStatus.SCHEDULED_FUTURE
    return CheckInStatus.NONE
