"""
Plotting of atom coordinate time series.
"""
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Union
import logging

from ..core.trajectory import AtomSeries
from ..utils.helpers import ensure_directory
from .styles import style_params

logger = logging.getLogger(__name__)

class AtomSeriesPlotter:
    def __init__(self, series: AtomSeries, output_path: Union[str, Path], **kwargs):
        """
        Initialize AtomSeriesPlotter with one atom's time series.

        Args:
            series: AtomSeries from Trajectory.atom()
            output_path: Path to save the plot
            **kwargs: Additional plotting parameters
        """
        self.series = series
        self.output_path = Path(output_path)

        self.default_params = {
            'title': None,
            'xlabel': 'Simulation step',
            'ylabel': r'Position ($\AA$)',
            'figsize': (10, 6),
            'dpi': 150,
            'color_scheme': 'default',
            'show_legend': True,
        }
        self.plot_params = {**self.default_params, **kwargs}

    def _steps(self) -> np.ndarray:
        header = self.series.trajectory.header
        return header.t0 + np.arange(len(self.series)) * max(header.steps_per_frame, 1)

    def generate_plot(self) -> Path:
        p = self.plot_params
        coords = self.series.to_array()
        if coords.shape[0] == 0:
            raise ValueError("Cannot plot an empty time series (trajectory has no frames).")
        steps = self._steps()

        with plt.style.context(style_params(color_scheme=p['color_scheme'])):
            fig, ax = plt.subplots(figsize=p['figsize'])
            try:
                for axis, label in enumerate(('x', 'y', 'z')):
                    ax.plot(steps, coords[:, axis], label=label)
                ax.set_xlabel(p['xlabel'])
                ax.set_ylabel(p['ylabel'])
                ax.set_title(p['title'] or f"Atom {self.series.atom}")
                if p['show_legend']:
                    ax.legend()
                ensure_directory(self.output_path.parent)
                fig.savefig(self.output_path, dpi=p['dpi'], bbox_inches='tight')
            finally:
                plt.close(fig)

        logger.info(f"Atom {self.series.atom} plot saved: {self.output_path}")
        return self.output_path
