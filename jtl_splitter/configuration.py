"""
Configuration constants for the JTL splitter.

This module contains all configuration parameters including:
- The fixed JTL column layout
- Phase routing defaults (warmup time unit, unit conversions)
- Statistics parameters (percentiles, precision)
- Output naming and progress reporting settings
"""

import os
from typing import Dict, Tuple

# =============================================================================
# JTL RECORD LAYOUT
# =============================================================================

# JMeter writes 16 columns per sample row by default
COLUMN_LIMIT: int = 16
COLUMN_DELIMITER: str = ","

# Interpreted column positions; everything else is passed through untouched
TIMESTAMP_COLUMN: int = 0
ELAPSED_COLUMN: int = 1
SUCCESS_COLUMN: int = 7
BYTES_RECEIVED_COLUMN: int = 9
BYTES_SENT_COLUMN: int = 10

COLUMN_NAMES: Dict[int, str] = {
    TIMESTAMP_COLUMN: "timeStamp",
    ELAPSED_COLUMN: "elapsed",
    SUCCESS_COLUMN: "success",
    BYTES_RECEIVED_COLUMN: "bytes",
    BYTES_SENT_COLUMN: "sentBytes",
}

INT32_RANGE: Tuple[int, int] = (-(2 ** 31), 2 ** 31 - 1)
INT64_RANGE: Tuple[int, int] = (-(2 ** 63), 2 ** 63 - 1)

# =============================================================================
# PHASE ROUTING
# =============================================================================

# Milliseconds per unit; sub-millisecond units are expressed as divisors
TIME_UNIT_MILLIS: Dict[str, int] = {
    "milliseconds": 1,
    "seconds": 1000,
    "minutes": 60 * 1000,
    "hours": 60 * 60 * 1000,
    "days": 24 * 60 * 60 * 1000,
}
TIME_UNIT_DIVISORS: Dict[str, int] = {
    "nanoseconds": 1_000_000,
    "microseconds": 1000,
}
TIME_UNITS: Tuple[str, ...] = (
    "nanoseconds",
    "microseconds",
    "milliseconds",
    "seconds",
    "minutes",
    "hours",
    "days",
)

DEFAULT_TIME_UNIT: str = os.getenv("JTL_SPLITTER_TIME_UNIT", "minutes").lower()

# =============================================================================
# STATISTICS
# =============================================================================

PERCENTILES: Tuple[float, ...] = (50, 75, 90, 95, 99, 99.9)
DEFAULT_PRECISION: int = int(os.getenv("JTL_SPLITTER_PRECISION", "2"))

BYTES_PER_KB: float = 1024.0
MILLIS_PER_SECOND: float = 1000.0
MIN_DURATION_MS: int = 1  # Lower bound for a phase span used in rate calculations

# =============================================================================
# OUTPUT
# =============================================================================

DEFAULT_JTL_EXTENSION: str = ".jtl"
JTL_EXTENSION_LENGTH: int = 4  # ".jtl", ".csv"
SUMMARY_SUFFIX: str = "-summary.json"
JSON_INDENT: int = 2

# =============================================================================
# PROGRESS REPORTING
# =============================================================================

PROGRESS_INTERVAL: int = int(os.getenv("JTL_SPLITTER_PROGRESS_INTERVAL", "10000"))  # Lines

# =============================================================================
# CLI DEFAULTS
# =============================================================================

DEFAULT_REPORT_FILE: str = "summary.csv"
DEFAULT_PLOTS_DIR: str = "plots"
