"""Tests for level and reward progress."""

from __future__ import annotations

import pytest

from recall_quiz.core.services.progress_ledger import ProgressLedger


class TestProgressLedger:
    def test_first_level_is_unlocked(self):
        ledger = ProgressLedger()

        assert ledger.is_unlocked(1)
        assert not ledger.is_unlocked(2)
        assert ledger.total_reward == 0

    def test_completing_a_level_unlocks_the_next(self):
        ledger = ProgressLedger()

        assert ledger.complete_level(1) == 2
        assert ledger.complete_level(2) == 3

        assert ledger.get_snapshot().unlocked_levels == [1, 2, 3]

    def test_rewards_accumulate(self):
        ledger = ProgressLedger()

        ledger.add_reward(3, level=1)
        ledger.add_reward(0, level=2)
        ledger.add_reward(5)

        assert ledger.total_reward == 8
        assert [entry.amount for entry in ledger.get_history()] == [3, 0, 5]

    def test_negative_reward_is_rejected(self):
        with pytest.raises(ValueError):
            ProgressLedger().add_reward(-1)

    def test_clear_resets_progress(self):
        ledger = ProgressLedger()
        ledger.complete_level(1)
        ledger.add_reward(4)

        ledger.clear()

        assert ledger.get_snapshot().unlocked_levels == [1]
        assert ledger.total_reward == 0
