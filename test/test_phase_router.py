"""Test suite for phase routing by elapsed time since the earliest sample."""

import sys
import os

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jtl_splitter.common.phase_router import EpochState, Phase, PhaseRouter, classify, to_millis
from jtl_splitter.persistence.record import JTLRecord


def record(timestamp):
    return JTLRecord(timestamp=timestamp, elapsed=10, success=True, bytes_received=0,
                     bytes_sent=0, raw_line=str(timestamp))


class TestToMillis:
    """Test duration unit conversion."""

    def test_seconds(self):
        assert to_millis(2, "seconds") == 2000

    def test_minutes(self):
        assert to_millis(5, "minutes") == 300_000

    def test_unit_case_ignored(self):
        assert to_millis(1, "HOURS") == 3_600_000

    def test_days(self):
        assert to_millis(1, "days") == 86_400_000

    def test_sub_millisecond_units_round_down(self):
        assert to_millis(1_500_000, "nanoseconds") == 1
        assert to_millis(999, "microseconds") == 0

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            to_millis(1, "fortnights")


class TestClassify:
    """Test the routing law and epoch maintenance."""

    def test_end_to_end_scenario(self):
        """Timestamps 1000, 2000, 5000 with a 2 second warmup."""
        state = EpochState()
        phases = []
        epochs = []
        for ts in (1000, 2000, 5000):
            phases.append(classify(record(ts), state, 2000))
            epochs.append(state.epoch)

        assert epochs == [1000, 1000, 1000]
        assert phases == [Phase.WARMUP, Phase.WARMUP, Phase.MEASUREMENT]

    def test_epoch_starts_at_infinity(self):
        assert EpochState().epoch == float("inf")

    def test_boundary_is_warmup(self):
        state = EpochState()
        classify(record(1000), state, 500)
        assert classify(record(1500), state, 500) == Phase.WARMUP
        assert classify(record(1501), state, 500) == Phase.MEASUREMENT

    def test_epoch_is_running_minimum(self):
        state = EpochState()
        epochs = []
        for ts in (5000, 3000, 4000, 1000, 6000):
            classify(record(ts), state, 1000)
            epochs.append(state.epoch)
        assert epochs == [5000, 3000, 3000, 1000, 1000]

    def test_out_of_order_lowers_epoch_for_current_and_later_records(self):
        state = EpochState()
        assert classify(record(5000), state, 1000) == Phase.WARMUP
        # Older sample moves the epoch down before its own routing
        assert classify(record(3000), state, 1000) == Phase.WARMUP
        assert classify(record(4500), state, 1000) == Phase.MEASUREMENT
        assert classify(record(1000), state, 1000) == Phase.WARMUP
        assert classify(record(2500), state, 1000) == Phase.MEASUREMENT


class TestPhaseRouter:
    """Test the stateful router wrapper."""

    def test_duration_in_unit(self):
        router = PhaseRouter(2, "seconds")
        assert router.warmup_duration_ms == 2000
        assert router.epoch == float("inf")

    def test_counts_routed_records(self):
        router = PhaseRouter(2, "seconds")
        for ts in (1000, 2000, 5000):
            router.route(record(ts))

        info = router.get_router_info()
        assert info['epoch'] == 1000
        assert info['warmup_records'] == 2
        assert info['measurement_records'] == 1
        assert "epoch=1000" in repr(router)
