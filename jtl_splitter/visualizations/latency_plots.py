"""
Latency visualization plots for split JTL files.
"""

import os
import logging
from typing import List, Optional

import matplotlib.pyplot as plt
import seaborn as sns

from .base import BasePlotter, load_split_samples
from jtl_splitter.common.phase_router import Phase
from jtl_splitter.configuration import MILLIS_PER_SECOND

logger = logging.getLogger(__name__)


class LatencyPlotter(BasePlotter):
    """Plotter for per-phase latency visualizations."""

    @classmethod
    def from_jtl(cls, jtl_path: str, output_dir: str) -> "LatencyPlotter":
        """Create a plotter from the split files of ``jtl_path``."""
        os.makedirs(output_dir, exist_ok=True)
        return cls(load_split_samples(jtl_path), output_dir)

    def create_latency_timeline(self) -> Optional[str]:
        """Create elapsed-vs-time scatter plot colored by phase."""
        if not self.has_data():
            logger.warning("No data available for latency timeline")
            return None

        data = self.data
        start = data['timestamp'].min()
        colors = self.get_phase_colors()

        plt.figure(figsize=(15, 8))
        for phase in self.get_unique_phases():
            phase_data = data[data['phase'] == phase]
            seconds = (phase_data['timestamp'] - start) / MILLIS_PER_SECOND
            plt.scatter(seconds, phase_data['elapsed'], s=4, alpha=0.5,
                        c=[colors[phase]], label=phase)

        warmup = data[data['phase'] == Phase.WARMUP.value]
        if len(warmup) > 0:
            boundary = (warmup['timestamp'].max() - start) / MILLIS_PER_SECOND
            plt.axvline(boundary, color='black', linestyle='--', linewidth=1, label='warmup end')

        plt.title('Latency Timeline by Phase', fontsize=14, fontweight='bold')
        plt.xlabel('Time since first sample (s)')
        plt.ylabel('Elapsed (ms)')
        plt.legend()
        plt.grid(True, alpha=0.3)
        plt.tight_layout()

        output_file = os.path.join(self.output_dir, 'latency_timeline.png')
        plt.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close()

        logger.info(f"Created latency timeline: {output_file}")
        return output_file

    def create_latency_histogram(self) -> Optional[str]:
        """Create per-phase latency histogram."""
        if not self.has_data():
            logger.warning("No data available for latency histogram")
            return None

        sns.set_theme()
        fig, ax = plt.subplots(figsize=(12, 8))
        sns.histplot(data=self.data, x='elapsed', hue='phase', hue_order=self.get_unique_phases(),
                     bins=50, element='step', ax=ax)
        ax.set_title('Latency Distribution by Phase', fontsize=14, fontweight='bold')
        ax.set_xlabel('Elapsed (ms)')
        ax.set_ylabel('Samples')
        fig.tight_layout()

        output_file = os.path.join(self.output_dir, 'latency_histogram.png')
        fig.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)

        logger.info(f"Created latency histogram: {output_file}")
        return output_file

    def create_all_plots(self) -> List[str]:
        plots = [self.create_latency_timeline(), self.create_latency_histogram()]
        return [plot for plot in plots if plot]
