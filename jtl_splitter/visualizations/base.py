"""
Base classes for plot visualization.
"""

import os
import logging
from typing import Optional

import pandas as pd

from jtl_splitter.common.phase_router import Phase
from jtl_splitter.configuration import TIMESTAMP_COLUMN, ELAPSED_COLUMN
from jtl_splitter.splitter import output_paths

logger = logging.getLogger(__name__)


def load_split_samples(jtl_path: str) -> Optional[pd.DataFrame]:
    """Load the warmup and measurement files written for ``jtl_path``.

    Returns:
        DataFrame with ``timestamp``, ``elapsed`` and ``phase`` columns, or
        None if neither split file holds any sample
    """
    paths = output_paths(jtl_path)
    frames = []
    for phase, path in ((Phase.WARMUP, paths.warmup), (Phase.MEASUREMENT, paths.measurement)):
        if not os.path.exists(path):
            logger.warning(f"Split file not found: {path}")
            continue
        frame = pd.read_csv(path, usecols=[TIMESTAMP_COLUMN, ELAPSED_COLUMN], index_col=False)
        frame.columns = ['timestamp', 'elapsed']
        frame['phase'] = phase.value
        frames.append(frame)
        logger.info(f"Loaded {len(frame)} {phase.value} samples from {path}")

    if not frames:
        return None
    data = pd.concat(frames, ignore_index=True)
    if len(data) == 0:
        return None
    return data


class BasePlotter:
    """Base class for all plotters with common functionality."""

    def __init__(self, data: Optional[pd.DataFrame], output_dir: str):
        self.data = data
        self.output_dir = output_dir

    def has_data(self) -> bool:
        return self.data is not None and len(self.data) > 0

    def get_unique_phases(self):
        """Get phases present in the data, warmup first."""
        if not self.has_data():
            return []
        present = set(self.data['phase'].unique())
        return [phase.value for phase in Phase if phase.value in present]

    def get_phase_colors(self):
        """Generate color map for phases."""
        import matplotlib.pyplot as plt
        phases = [phase.value for phase in Phase]
        phase_colors = plt.cm.Set1(range(len(phases)))
        return dict(zip(phases, phase_colors))
