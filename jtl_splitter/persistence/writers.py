"""
Writers for split JTL output and phase summaries.
"""

import json
import logging
from typing import Dict, TextIO

from jtl_splitter.common.phase_router import Phase
from jtl_splitter.configuration import JSON_INDENT
from jtl_splitter.persistence.metrics_aggregator import Summary
from jtl_splitter.persistence.record import JTLRecord

logger = logging.getLogger(__name__)


class SplitWriter:
    """Appends raw sample lines to the output stream of their phase.

    Attributes:
        streams: Output stream per phase
        lines_written: Sample lines written per phase, header excluded
    """

    def __init__(self, warmup_out: TextIO, measurement_out: TextIO):
        self.streams: Dict[Phase, TextIO] = {
            Phase.WARMUP: warmup_out,
            Phase.MEASUREMENT: measurement_out,
        }
        self.lines_written: Dict[Phase, int] = {phase: 0 for phase in Phase}

    def write_header(self, header: str) -> None:
        """Copy the header line to every output."""
        for stream in self.streams.values():
            stream.write(header)
            stream.write("\n")

    def write(self, record: JTLRecord, phase: Phase) -> None:
        stream = self.streams[phase]
        stream.write(record.raw_line)
        stream.write("\n")
        self.lines_written[phase] += 1


class SummaryWriter:
    """Serializes phase summaries as pretty-printed JSON."""

    def __init__(self, indent: int = JSON_INDENT):
        self.indent = indent

    def write(self, summary: Summary, stream: TextIO) -> None:
        json.dump(summary.to_dict(), stream, indent=self.indent)
        stream.write("\n")

    def write_file(self, summary: Summary, path: str) -> str:
        """Write a summary to ``path`` and return the path."""
        with open(path, "w", encoding="utf-8") as f:
            self.write(summary, f)
        logger.debug(f"Wrote summary with {summary.count} samples to {path}")
        return path
