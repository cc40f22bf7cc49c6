"""
Metrics aggregator for per-phase JTL summary statistics.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from jtl_splitter.common.metrics_utils import (
    calculate_percentiles,
    calculate_duration_seconds,
    calculate_requests_per_second,
    calculate_kb_per_second,
)
from jtl_splitter.common.phase_router import Phase
from jtl_splitter.configuration import DEFAULT_PRECISION, PERCENTILES
from jtl_splitter.persistence.record import JTLRecord

logger = logging.getLogger(__name__)


def percentile_key(percentile: float) -> str:
    """JSON key for a percentile: 50 -> 'percentile50', 99.9 -> 'percentile99.9'."""
    return f"percentile{percentile:g}"


@dataclass(frozen=True)
class Summary:
    """Read-only statistics snapshot of one phase."""

    count: int = 0
    error_count: int = 0
    error_percentage: float = 0.0
    average: float = 0.0
    min: int = 0
    max: int = 0
    percentiles: Dict[float, float] = field(default_factory=lambda: {p: 0.0 for p in PERCENTILES})
    throughput: float = 0.0
    received_kbps: float = 0.0
    sent_kbps: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Key-ordered representation used for JSON output and reports."""
        data: Dict[str, Any] = {
            'count': self.count,
            'errorCount': self.error_count,
            'errorPercentage': self.error_percentage,
            'average': self.average,
            'min': self.min,
            'max': self.max,
        }
        for percentile, value in self.percentiles.items():
            data[percentile_key(percentile)] = value
        data['throughput'] = self.throughput
        data['receivedKBps'] = self.received_kbps
        data['sentKBps'] = self.sent_kbps
        return data


def summary_keys() -> List[str]:
    """Summary field names in output order."""
    return list(Summary().to_dict().keys())


class PhaseStats:
    """Running statistics of the samples routed to one phase.

    Every elapsed value is retained so percentiles are exact; memory grows
    linearly with the number of samples in the phase.
    """

    def __init__(self, precision: int = DEFAULT_PRECISION):
        self.precision = precision
        self.sample_count: int = 0
        self.error_count: int = 0
        self.elapsed_sum: int = 0
        self.min_elapsed: Optional[int] = None
        self.max_elapsed: Optional[int] = None
        self.elapsed_values: List[int] = []
        self.total_bytes_received: int = 0
        self.total_bytes_sent: int = 0
        self.first_timestamp: Optional[int] = None
        self.last_timestamp: Optional[int] = None

    def add_sample(self, timestamp: int, elapsed: int, success: bool,
                   bytes_received: int, bytes_sent: int) -> None:
        """Add one sample.

        Args:
            timestamp: Sample start time in epoch milliseconds
            elapsed: Sample latency in milliseconds
            success: Whether the sample succeeded
            bytes_received: Response size in bytes
            bytes_sent: Request size in bytes
        """
        self.sample_count += 1
        if not success:
            self.error_count += 1
        self.elapsed_sum += elapsed
        if self.min_elapsed is None or elapsed < self.min_elapsed:
            self.min_elapsed = elapsed
        if self.max_elapsed is None or elapsed > self.max_elapsed:
            self.max_elapsed = elapsed
        self.elapsed_values.append(elapsed)
        self.total_bytes_received += bytes_received
        self.total_bytes_sent += bytes_sent
        if self.first_timestamp is None or timestamp < self.first_timestamp:
            self.first_timestamp = timestamp
        if self.last_timestamp is None or timestamp > self.last_timestamp:
            self.last_timestamp = timestamp

    def add_record(self, record: JTLRecord) -> None:
        self.add_sample(record.timestamp, record.elapsed, record.success,
                        record.bytes_received, record.bytes_sent)

    def calculate(self) -> Summary:
        """Compute the phase summary.

        Returns:
            Summary with values rounded to ``precision``; all zeros if the
            phase received no samples
        """
        if self.sample_count == 0:
            return Summary()

        duration_seconds = calculate_duration_seconds(self.first_timestamp, self.last_timestamp)
        percentiles = calculate_percentiles(self.elapsed_values, PERCENTILES)

        return Summary(
            count=self.sample_count,
            error_count=self.error_count,
            error_percentage=self._round(100.0 * self.error_count / self.sample_count),
            average=self._round(self.elapsed_sum / self.sample_count),
            min=self.min_elapsed,
            max=self.max_elapsed,
            percentiles={p: self._round(v) for p, v in percentiles.items()},
            throughput=self._round(calculate_requests_per_second(self.sample_count, duration_seconds)),
            received_kbps=self._round(calculate_kb_per_second(self.total_bytes_received, duration_seconds)),
            sent_kbps=self._round(calculate_kb_per_second(self.total_bytes_sent, duration_seconds)),
        )

    def _round(self, value: float) -> float:
        return round(float(value), self.precision)

    def __repr__(self) -> str:
        return f"PhaseStats(samples={self.sample_count}, errors={self.error_count})"


class StatAccumulator:
    """Keeps one PhaseStats per phase and summarizes them on demand."""

    def __init__(self, precision: int = DEFAULT_PRECISION):
        """Initialize the accumulator.

        Args:
            precision: Decimal digits kept in summary values (default: 2)
        """
        if precision < 0:
            raise ValueError(f"Precision must be non-negative: {precision}")
        self.precision = precision
        self.phase_stats: Dict[Phase, PhaseStats] = {phase: PhaseStats(precision) for phase in Phase}

        logger.debug(f"Initialized StatAccumulator with precision {precision}")

    def add_record(self, phase: Phase, record: JTLRecord) -> None:
        self.phase_stats[phase].add_record(record)

    def calculate(self, phase: Phase) -> Summary:
        stats = self.phase_stats[phase]
        if stats.sample_count == 0:
            logger.warning(f"No samples in {phase.value} phase, summary will be all zeros")
        return stats.calculate()

    def calculate_all(self) -> Dict[Phase, Summary]:
        return {phase: self.calculate(phase) for phase in Phase}

    def get_total_records(self) -> int:
        return sum(stats.sample_count for stats in self.phase_stats.values())
