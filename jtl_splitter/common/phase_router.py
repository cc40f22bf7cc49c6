"""
Phase router assigning JTL samples to the warmup or measurement phase.
"""

import enum
import logging
from typing import Dict, Any

from jtl_splitter.configuration import (
    DEFAULT_TIME_UNIT,
    TIME_UNIT_MILLIS,
    TIME_UNIT_DIVISORS,
)
from jtl_splitter.persistence.record import JTLRecord

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    WARMUP = "warmup"
    MEASUREMENT = "measurement"


class EpochState:
    """Running minimum of all timestamps seen so far."""

    def __init__(self):
        self.epoch: float = float("inf")

    def observe(self, timestamp: int) -> float:
        if timestamp < self.epoch:
            self.epoch = timestamp
        return self.epoch

    def __repr__(self) -> str:
        return f"EpochState(epoch={self.epoch})"


def to_millis(duration: int, time_unit: str = DEFAULT_TIME_UNIT) -> int:
    """Convert a duration in ``time_unit`` to whole milliseconds.

    Args:
        duration: Duration value
        time_unit: One of configuration.TIME_UNITS

    Returns:
        Milliseconds, rounded down for sub-millisecond units

    Raises:
        ValueError: If the time unit is unknown
    """
    unit = time_unit.lower()
    if unit in TIME_UNIT_MILLIS:
        return duration * TIME_UNIT_MILLIS[unit]
    if unit in TIME_UNIT_DIVISORS:
        return duration // TIME_UNIT_DIVISORS[unit]
    raise ValueError(f"Unsupported time unit: {time_unit}")


def classify(record: JTLRecord, epoch_state: EpochState, warmup_duration_ms: int) -> Phase:
    """Route a record, lowering the epoch first if the record is older than it.

    Records already routed are never revisited when the epoch moves.
    """
    epoch = epoch_state.observe(record.timestamp)
    diff = record.timestamp - epoch
    if diff <= warmup_duration_ms:
        return Phase.WARMUP
    return Phase.MEASUREMENT


class PhaseRouter:
    """Routes records by elapsed time since the earliest timestamp seen."""

    def __init__(self, warmup_duration: int, time_unit: str = DEFAULT_TIME_UNIT):
        """Initialize the phase router.

        Args:
            warmup_duration: Warmup length expressed in ``time_unit``
            time_unit: Unit of ``warmup_duration`` (default: minutes)
        """
        self.warmup_duration = warmup_duration
        self.time_unit = time_unit.lower()
        self.warmup_duration_ms = to_millis(warmup_duration, time_unit)
        self.epoch_state = EpochState()
        self.routed: Dict[Phase, int] = {Phase.WARMUP: 0, Phase.MEASUREMENT: 0}

        logger.debug(f"Initialized PhaseRouter with {self.warmup_duration_ms} ms warmup")

    def route(self, record: JTLRecord) -> Phase:
        phase = classify(record, self.epoch_state, self.warmup_duration_ms)
        self.routed[phase] += 1
        return phase

    @property
    def epoch(self) -> float:
        return self.epoch_state.epoch

    def get_router_info(self) -> Dict[str, Any]:
        return {
            'warmup_duration': self.warmup_duration,
            'time_unit': self.time_unit,
            'warmup_duration_ms': self.warmup_duration_ms,
            'epoch': self.epoch,
            'warmup_records': self.routed[Phase.WARMUP],
            'measurement_records': self.routed[Phase.MEASUREMENT],
        }

    def __repr__(self) -> str:
        return f"PhaseRouter(warmup_ms={self.warmup_duration_ms}, epoch={self.epoch})"
