"""
Collect phase summary JSON files into one table.
"""

import os
import glob
import json
import logging
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from jtl_splitter.common.phase_router import Phase
from jtl_splitter.configuration import SUMMARY_SUFFIX
from jtl_splitter.errors import JTLSplitterError
from jtl_splitter.persistence.metrics_aggregator import summary_keys

logger = logging.getLogger(__name__)

PHASE_ORDER = [phase.value for phase in Phase]


def parse_summary_name(path: str) -> Optional[Tuple[str, str]]:
    """Split ``results-warmup-summary.json`` into ('results', 'warmup')."""
    file_name = os.path.basename(path)
    if not file_name.endswith(SUMMARY_SUFFIX):
        return None
    stem = file_name[:-len(SUMMARY_SUFFIX)]
    for phase in PHASE_ORDER:
        suffix = f"-{phase}"
        if stem.endswith(suffix) and len(stem) > len(suffix):
            return stem[:-len(suffix)], phase
    return None


def find_summary_files(paths: Iterable[str]) -> List[str]:
    """Expand directories (non-recursively) into the summary files they hold."""
    files = []
    for path in paths:
        if os.path.isdir(path):
            files.extend(sorted(glob.glob(os.path.join(path, f"*{SUMMARY_SUFFIX}"))))
        else:
            files.append(path)
    return files


class SummaryTable:
    """Table of phase summaries, one row per (name, phase).

    Attributes:
        data: DataFrame with columns ``name``, ``phase`` and every summary key
    """

    def __init__(self, data: pd.DataFrame):
        self.data = data

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "SummaryTable":
        """Load summary JSON files from files and directories.

        Raises:
            JTLSplitterError: If no summary file is found
        """
        rows = []
        for path in find_summary_files(paths):
            parsed = parse_summary_name(path)
            if parsed is None:
                logger.warning(f"Not a phase summary file, skipping: {path}")
                continue
            name, phase = parsed
            with open(path, "r", encoding="utf-8") as f:
                summary = json.load(f)
            rows.append({'name': name, 'phase': phase, **summary})
            logger.debug(f"Loaded {phase} summary for {name}")

        if not rows:
            raise JTLSplitterError("No summary files found")

        columns = ['name', 'phase'] + summary_keys()
        data = pd.DataFrame(rows).reindex(columns=columns)
        data['phase'] = pd.Categorical(data['phase'], categories=PHASE_ORDER, ordered=True)
        data = data.sort_values(['name', 'phase']).reset_index(drop=True)
        data['phase'] = data['phase'].astype(str)

        logger.info(f"Loaded {len(data)} summaries")
        return cls(data)

    def measurement_only(self) -> pd.DataFrame:
        return self.data[self.data['phase'] == Phase.MEASUREMENT.value].reset_index(drop=True)

    def to_csv(self, path: str) -> str:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.data.to_csv(path, index=False)
        logger.info(f"Wrote summary table with {len(self.data)} rows to {path}")
        return path
