"""Curated fallback values used to pad wrong answers when real data is sparse."""

from __future__ import annotations

from datetime import datetime

FALLBACK_NAMES: tuple[str, ...] = (
    "Margaret",
    "Robert",
    "Susan",
    "David",
    "Linda",
    "Charles",
    "Karen",
    "James",
)

FALLBACK_RELATIONSHIPS: tuple[str, ...] = (
    "Friend",
    "Neighbour",
    "Colleague",
    "Cousin",
    "Uncle",
    "Aunt",
    "Doctor",
    "Nurse",
)

FALLBACK_LOCATIONS: tuple[str, ...] = (
    "Auckland",
    "Wellington",
    "Christchurch",
    "Hamilton",
    "Tauranga",
    "Dunedin",
    "Napier",
    "Palmerston North",
)

FALLBACK_FACTS: tuple[str, ...] = (
    "Loves cooking",
    "Enjoys gardening",
    "Plays chess",
    "Likes hiking",
    "Reads a lot",
    "Enjoys painting",
    "Loves music",
    "Great at crosswords",
)

# Months either side of the real date, nearest first.
_NEARBY_MONTH_OFFSETS: tuple[int, ...] = (-1, 1, -2, 2, -3, 3, -6, 6, -12, 12)


def format_month_year(moment: datetime) -> str:
    """Format a timestamp as ``"{Month} {Year}"``, e.g. ``"March 2024"``."""
    return moment.strftime("%B %Y")


def nearby_month_labels(moment: datetime) -> tuple[str, ...]:
    """Return month/year labels close to ``moment`` for use as date distractors."""
    labels: list[str] = []
    for offset in _NEARBY_MONTH_OFFSETS:
        month_index = moment.year * 12 + (moment.month - 1) + offset
        year, month_zero_based = divmod(month_index, 12)
        labels.append(format_month_year(datetime(year, month_zero_based + 1, 1)))
    return tuple(labels)
