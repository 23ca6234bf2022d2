"""Service tracking unlocked quiz levels and the reward currency."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from recall_quiz.constants.quiz_constants import FIRST_LEVEL


@dataclass(slots=True)
class RewardEntry:
    """One reward credit, kept for the progress history."""

    amount: int
    level: int | None = None
    credited_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(slots=True)
class ProgressSnapshot:
    """Immutable snapshot returned to consumers."""

    unlocked_levels: list[int]
    total_reward: int


class ProgressLedger:
    """In-memory record of level progress and earned reward."""

    def __init__(self) -> None:
        self._unlocked_levels: set[int] = {FIRST_LEVEL}
        self._history: list[RewardEntry] = []
        self._total_reward: int = 0

    def is_unlocked(self, level: int) -> bool:
        return level in self._unlocked_levels

    def unlock(self, level: int) -> None:
        if level < FIRST_LEVEL:
            raise ValueError(f"Level must be at least {FIRST_LEVEL}.")
        self._unlocked_levels.add(level)

    def complete_level(self, level: int) -> int:
        """Mark ``level`` as played through and unlock the one after it."""
        next_level = level + 1
        self.unlock(next_level)
        return next_level

    def add_reward(self, amount: int, level: int | None = None) -> None:
        if amount < 0:
            raise ValueError("Reward amount cannot be negative.")
        self._total_reward += amount
        self._history.append(RewardEntry(amount=amount, level=level))

    @property
    def total_reward(self) -> int:
        return self._total_reward

    def get_history(self) -> list[RewardEntry]:
        return list(self._history)

    def get_snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            unlocked_levels=sorted(self._unlocked_levels),
            total_reward=self._total_reward,
        )

    def clear(self) -> None:
        """Reset progress back to the first level with no reward."""
        self._unlocked_levels = {FIRST_LEVEL}
        self._history.clear()
        self._total_reward = 0
