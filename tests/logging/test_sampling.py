"""
Test module for lucidlog.logging.sampling
"""

from unittest.mock import Mock, patch

import pytest
from structlog import DropEvent

from lucidlog.logging.sampling import Sampler


class FakeClock:

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _passes(sampler, level="info", event="repeated"):
    try:
        sampler(Mock(), level, {"level": level, "event": event})
    except DropEvent:
        return False
    return True


class TestSampler:

    def test_first_then_every_nth(self):
        """Test the first entries pass, then every Nth."""
        sampler = Sampler(initial=3, thereafter=2, clock=FakeClock())

        results = [_passes(sampler) for _ in range(8)]

        assert results == [True, True, True, False, True, False, True, False]

    def test_default_policy_over_one_window(self):
        """Test 100 verbatim, then 1 in 100."""
        sampler = Sampler(clock=FakeClock())

        passed = [i + 1 for i in range(350) if _passes(sampler)]

        assert len(passed) == 102
        assert passed[:100] == list(range(1, 101))
        assert passed[100:] == [200, 300]

    def test_keys_are_counted_separately(self):
        """Test messages and levels have independent counters."""
        sampler = Sampler(initial=1, thereafter=100, clock=FakeClock())
        buckets = {("info", "a"): 0, ("info", "b"): 1, ("error", "a"): 2}

        with patch.object(sampler, "_bucket", side_effect=buckets.__getitem__):
            assert _passes(sampler, event="a")
            assert _passes(sampler, event="b")
            assert _passes(sampler, level="error", event="a")
            assert not _passes(sampler, event="a")

    def test_memory_is_bounded(self):
        """Test distinct messages never grow the counter table."""
        sampler = Sampler(clock=FakeClock(), buckets=64)

        for i in range(10000):
            _passes(sampler, event=f"user {i} logged in")

        assert len(sampler._counts) == 64
        assert sum(sampler._counts) == 10000

    def test_colliding_keys_share_a_counter(self):
        sampler = Sampler(initial=1, thereafter=100, clock=FakeClock(), buckets=1)

        assert _passes(sampler, event="a")
        assert not _passes(sampler, event="b")

    def test_counters_reset_each_window(self):
        clock = FakeClock()
        sampler = Sampler(initial=1, thereafter=100, interval=1.0, clock=clock)

        assert _passes(sampler)
        assert not _passes(sampler)

        clock.now = 1.0
        assert _passes(sampler)
        assert not _passes(sampler)

    @pytest.mark.parametrize("kwargs", [
        {"initial": 0},
        {"thereafter": 0},
        {"interval": 0},
        {"buckets": 0},
    ])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            Sampler(**kwargs)
