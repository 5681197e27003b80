"""
Unit tests for most_used() and SendPolicy.
"""

import pytest

from tests.fixtures.fakes import FakeClock
from tppbot.stats.bucket import Bucket
from tppbot.stats.policy import POLICY_TABLE, SendPolicy, most_used, weighted_counts
from tppbot.stats.window import WindowAggregator


class TestMostUsed:
    """Test class for the weighted second-highest selection."""

    def test_all_zero_is_deterministic(self):
        assert most_used(Bucket()) == "anarchie"

    def test_second_highest_wins(self):
        assert most_used(Bucket(up=10, left=5)) == "w"

    def test_single_command_yields_runner_up_in_table_order(self):
        # Every other entry ties at zero; the last of them is "start".
        assert most_used(Bucket(up=10)) == "start"

    def test_ties_keep_table_order(self):
        assert most_used(Bucket(up=5, left=5)) == "n"

    def test_democracy_is_doubled(self):
        # democracy 3 -> 6 beats up 5, so up becomes the runner-up.
        assert most_used(Bucket(up=5, left=4, democracy=3)) == "n"

    def test_anarchy_is_quartered(self):
        # anarchy 20 -> 5 stays below up 6.
        assert most_used(Bucket(up=6, anarchy=20, left=1)) == "anarchie"

    def test_small_anarchy_counts_round_down(self):
        weights = dict((label, count) for count, label in weighted_counts(Bucket(anarchy=3)))

        assert weights["anarchie"] == 0

    def test_table_has_eleven_entries(self):
        assert len(POLICY_TABLE) == 11


def busy_window(clock: FakeClock, per_bucket: dict[str, int], noise: int = 0) -> WindowAggregator:
    """Window of 4 one-second buckets (short window of 2) filled until full."""
    window = WindowAggregator(sample_duration=1.0, long_count=4, short_count=2, clock=clock)
    for _ in range(4):
        for command, count in per_bucket.items():
            for _ in range(count):
                window.current.record_message(command)
        for _ in range(noise):
            window.current.record_message(None)
        window.rotate()
    assert window.is_full
    return window


class TestSendPolicy:
    """Test class for SendPolicy.evaluate() and friends."""

    def test_cold_start_is_not_eligible(self, clock: FakeClock):
        window = WindowAggregator(sample_duration=1.0, long_count=4, short_count=2, clock=clock)
        policy = SendPolicy(clock=clock)

        decision = policy.evaluate(window)

        assert decision.eligible is False
        assert decision.remaining == decision.interval
        assert decision.commands_per_message == 0.0

    def test_busy_window_is_eligible(self, clock: FakeClock):
        window = busy_window(clock, {"left": 5, "up": 3})
        policy = SendPolicy(clock=clock)

        decision = policy.evaluate(window)

        assert decision.commands_per_second == pytest.approx(8.0)
        assert decision.commands_per_message == pytest.approx(1.0)
        assert decision.remaining == 0.0
        assert decision.eligible is True
        assert decision.label == "n"

    def test_interval_uses_commands_per_second(self, clock: FakeClock):
        window = busy_window(clock, {"up": 3})
        policy = SendPolicy(clock=clock)

        decision = policy.evaluate(window)

        assert decision.commands_per_second == pytest.approx(3.0)
        assert decision.interval == pytest.approx(5.0)

    def test_interval_never_below_rate_limit(self, clock: FakeClock):
        window = busy_window(clock, {"up": 10})
        policy = SendPolicy(clock=clock)

        decision = policy.evaluate(window)

        assert decision.interval == pytest.approx(1.0 / (20.0 / 30.0) + 0.3)
        assert policy.min_interval == pytest.approx(1.8)

    def test_low_command_ratio_is_not_eligible(self, clock: FakeClock):
        window = busy_window(clock, {"up": 3}, noise=3)
        policy = SendPolicy(clock=clock)

        decision = policy.evaluate(window)

        assert decision.commands_per_message == pytest.approx(0.5)
        assert decision.eligible is False

    def test_low_command_rate_is_not_eligible(self, clock: FakeClock):
        window = busy_window(clock, {"up": 1})
        policy = SendPolicy(clock=clock)

        decision = policy.evaluate(window)

        assert decision.commands_per_second == pytest.approx(1.0)
        assert decision.eligible is False

    def test_mark_sent_waits_for_interval(self, clock: FakeClock):
        window = busy_window(clock, {"left": 5, "up": 3})
        policy = SendPolicy(clock=clock)
        decision = policy.evaluate(window)

        policy.mark_sent("n", decision)
        assert policy.messages_sent == 1

        waiting = policy.evaluate(window)
        assert waiting.eligible is False
        assert waiting.remaining == pytest.approx(decision.interval)

        clock.advance(decision.interval)
        assert policy.evaluate(window).eligible is True

    def test_repeated_label_alternates_case(self, clock: FakeClock):
        window = busy_window(clock, {"left": 5, "up": 3})
        policy = SendPolicy(clock=clock)
        decision = policy.evaluate(window)
        sent = []

        for _ in range(3):
            text = policy.next_text("n")
            policy.mark_sent(text, decision)
            sent.append(text)

        assert sent == ["n", "N", "n"]

    def test_new_label_is_used_verbatim(self, clock: FakeClock):
        policy = SendPolicy(clock=clock)
        policy.last_text = "n"

        assert policy.next_text("democratie") == "democratie"

    def test_invalid_rate_limit(self):
        with pytest.raises(ValueError):
            SendPolicy(rate_limit=0)
