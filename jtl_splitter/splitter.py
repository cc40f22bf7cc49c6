"""
Split a JTL results file into warmup and measurement files, optionally
summarizing each phase.
"""

import os
import time
import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, TextIO

from jtl_splitter.common.phase_router import Phase, PhaseRouter
from jtl_splitter.configuration import (
    COLUMN_LIMIT,
    DEFAULT_JTL_EXTENSION,
    DEFAULT_PRECISION,
    DEFAULT_TIME_UNIT,
    JTL_EXTENSION_LENGTH,
    PROGRESS_INTERVAL,
    SUMMARY_SUFFIX,
)
from jtl_splitter.errors import InvalidFieldError
from jtl_splitter.persistence.metrics_aggregator import StatAccumulator, Summary
from jtl_splitter.persistence.parser import parse_line
from jtl_splitter.persistence.record import TooManyColumns
from jtl_splitter.persistence.writers import SplitWriter, SummaryWriter

logger = logging.getLogger(__name__)


def _no_progress(lines_processed: int) -> None:
    pass


def log_progress(lines_processed: int) -> None:
    logger.info(f"Processed {lines_processed} lines.")


@dataclass
class SplitConfig:
    """Settings for one split run."""

    warmup_duration: int
    time_unit: str = DEFAULT_TIME_UNIT
    summarize: bool = False
    precision: int = DEFAULT_PRECISION
    show_progress: bool = False
    progress_interval: int = PROGRESS_INTERVAL
    column_limit: int = COLUMN_LIMIT
    skip_invalid_fields: bool = False
    progress_callback: Callable[[int], None] = _no_progress

    def __post_init__(self):
        if self.warmup_duration <= 0:
            raise ValueError(f"Warmup duration must be positive: {self.warmup_duration}")
        if self.precision < 0:
            raise ValueError(f"Precision must be non-negative: {self.precision}")
        if self.progress_interval <= 0:
            raise ValueError(f"Progress interval must be positive: {self.progress_interval}")


@dataclass
class SplitResult:
    """Outcome of a split run."""

    lines_written: Dict[Phase, int] = field(default_factory=lambda: {phase: 0 for phase in Phase})
    skipped_lines: List[int] = field(default_factory=list)
    invalid_lines: List[int] = field(default_factory=list)
    epoch: float = float("inf")
    summaries: Optional[Dict[Phase, Summary]] = None
    output_files: Dict[str, str] = field(default_factory=dict)
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class OutputPaths:
    warmup: str
    measurement: str
    warmup_summary: str
    measurement_summary: str


def output_paths(jtl_path: str) -> OutputPaths:
    """Derive output file names next to the input file.

    ``results.jtl`` becomes ``results-warmup.jtl``, ``results-measurement.jtl``,
    ``results-warmup-summary.json`` and ``results-measurement-summary.json``.
    """
    directory, file_name = os.path.split(jtl_path)
    prefix, extension = os.path.splitext(file_name)
    if len(extension) != JTL_EXTENSION_LENGTH or not prefix:
        prefix, extension = file_name, DEFAULT_JTL_EXTENSION

    def sibling(name: str) -> str:
        return os.path.join(directory, name)

    return OutputPaths(
        warmup=sibling(f"{prefix}-{Phase.WARMUP.value}{extension}"),
        measurement=sibling(f"{prefix}-{Phase.MEASUREMENT.value}{extension}"),
        warmup_summary=sibling(f"{prefix}-{Phase.WARMUP.value}{SUMMARY_SUFFIX}"),
        measurement_summary=sibling(f"{prefix}-{Phase.MEASUREMENT.value}{SUMMARY_SUFFIX}"),
    )


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class JTLSplitter:
    """Splits a JTL stream into warmup and measurement phases in a single pass."""

    def __init__(self, config: SplitConfig):
        self.config = config
        self.summary_writer = SummaryWriter()

        logger.debug(f"Initialized JTLSplitter: {config.warmup_duration} {config.time_unit}, "
                     f"summarize={config.summarize}")

    def split_stream(self, lines: Iterable[str], warmup_out: TextIO,
                     measurement_out: TextIO) -> SplitResult:
        """Route every sample line of ``lines`` to one of the two outputs.

        The first line is the header and is copied to both outputs.

        Args:
            lines: Input lines, with or without terminators
            warmup_out: Output stream for warmup samples
            measurement_out: Output stream for measurement samples

        Returns:
            SplitResult with per-phase counts and, when summarizing, summaries

        Raises:
            InvalidFieldError: If an interpreted column is malformed and
                ``skip_invalid_fields`` is off
        """
        config = self.config
        router = PhaseRouter(config.warmup_duration, config.time_unit)
        writer = SplitWriter(warmup_out, measurement_out)
        accumulator = StatAccumulator(config.precision) if config.summarize else None
        result = SplitResult()

        iterator = iter(lines)
        header = next(iterator, None)
        if header is None:
            logger.warning("Input is empty, no header to copy")
        else:
            writer.write_header(_strip_terminator(header))

        processed = 0
        for line_number, line in enumerate(iterator, start=2):
            line = _strip_terminator(line)
            try:
                parsed = parse_line(line, line_number, config.column_limit)
            except InvalidFieldError as e:
                if not config.skip_invalid_fields:
                    raise
                logger.warning(f"Skipping line: {e}")
                result.invalid_lines.append(line_number)
                continue

            if isinstance(parsed, TooManyColumns):
                logger.warning(f"Line {parsed.line_number} has more columns than expected: {parsed.raw_line}")
                result.skipped_lines.append(parsed.line_number)
                continue

            phase = router.route(parsed)
            writer.write(parsed, phase)
            if accumulator is not None:
                accumulator.add_record(phase, parsed)

            processed += 1
            if config.show_progress and processed % config.progress_interval == 0:
                config.progress_callback(processed)

        result.lines_written = dict(writer.lines_written)
        result.epoch = router.epoch
        if accumulator is not None:
            result.summaries = accumulator.calculate_all()

        logger.info(f"Routed {result.lines_written[Phase.WARMUP]} warmup and "
                    f"{result.lines_written[Phase.MEASUREMENT]} measurement samples, "
                    f"skipped {len(result.skipped_lines) + len(result.invalid_lines)} lines")
        return result

    def split_file(self, jtl_path: str, delete_input_on_success: bool = False) -> SplitResult:
        """Split ``jtl_path`` into sibling warmup and measurement files.

        Args:
            jtl_path: Path to the JTL file
            delete_input_on_success: Remove the input once every output is written

        Returns:
            SplitResult including the written output files

        Raises:
            InvalidFieldError: If an interpreted column is malformed
            OSError: If any input or output file cannot be read or written
        """
        start_time = time.monotonic()
        paths = output_paths(jtl_path)
        file_name = os.path.basename(jtl_path)

        logger.info(f"Splitting {file_name} file into {os.path.basename(paths.warmup)} "
                    f"and {os.path.basename(paths.measurement)}.")
        logger.info(f"Warmup Time: {self.config.warmup_duration} {self.config.time_unit}")
        if self.config.summarize:
            logger.info(f"Summarization is enabled. Summary statistics will be written to "
                        f"{os.path.basename(paths.warmup_summary)} and "
                        f"{os.path.basename(paths.measurement_summary)}.")
        if self.config.show_progress:
            logger.info("Started splitting...")

        with ExitStack() as stack:
            jtl_file = stack.enter_context(
                open(jtl_path, "r", encoding="utf-8", errors="surrogateescape"))
            warmup_out = stack.enter_context(
                open(paths.warmup, "w", encoding="utf-8", errors="surrogateescape"))
            measurement_out = stack.enter_context(
                open(paths.measurement, "w", encoding="utf-8", errors="surrogateescape"))
            result = self.split_stream(jtl_file, warmup_out, measurement_out)

        result.output_files = {
            Phase.WARMUP.value: paths.warmup,
            Phase.MEASUREMENT.value: paths.measurement,
        }

        if result.summaries is not None:
            self.summary_writer.write_file(result.summaries[Phase.WARMUP], paths.warmup_summary)
            self.summary_writer.write_file(result.summaries[Phase.MEASUREMENT], paths.measurement_summary)
            result.output_files[f"{Phase.WARMUP.value}_summary"] = paths.warmup_summary
            result.output_files[f"{Phase.MEASUREMENT.value}_summary"] = paths.measurement_summary

        if delete_input_on_success:
            os.remove(jtl_path)
            logger.info(f"Deleted {file_name}")

        result.duration_seconds = time.monotonic() - start_time
        minutes, seconds = divmod(int(result.duration_seconds), 60)
        logger.info(f"Done in {minutes} min, {seconds} sec.")
        return result
