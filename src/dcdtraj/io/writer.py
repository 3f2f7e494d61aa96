"""
Trajectory export module.

This module writes coordinates read from DCD trajectories to numpy files and
header metadata to YAML.
"""
import numpy as np
from pathlib import Path
import logging
from typing import Optional, Union
import yaml
from tqdm import tqdm

from ..core.header import TrajectoryHeader
from ..core.trajectory import Trajectory
from ..utils.helpers import ensure_directory

logger = logging.getLogger(__name__)

class TrajectoryWriter:
    """Class for writing trajectory coordinates and metadata."""

    def __init__(self, output_dir: Union[str, Path]):
        """
        Initialize the trajectory writer.

        Args:
            output_dir: Directory to write output files to
        """
        self.output_dir = ensure_directory(output_dir)

    def save_positions(self, traj: Trajectory, filename: Optional[str] = None, fmt: str = 'npy') -> Path:
        """
        Save all free-atom coordinates as a (n_frames, free_atoms, 3) array.

        Frames are copied one at a time so memory use stays at one output array.

        Args:
            traj: Open trajectory
            filename: Optional custom filename (default: '<stem>.positions.<fmt>')
            fmt: 'npy' or 'npz'

        Returns:
            Path of the written file
        """
        if fmt not in ('npy', 'npz'):
            raise ValueError(f"Unsupported export format: {fmt}. Must be one of: ['npy', 'npz']")
        if filename is None:
            filename = f"{traj.path.stem}.positions.{fmt}"
        filepath = self.output_dir / filename

        positions = np.empty((traj.n_frames, traj.free_atoms, 3), dtype=np.float32)
        for frame in tqdm(traj, total=traj.n_frames, desc=f"Exporting frames from {traj.path.name}", unit="fr"):
            positions[frame.index] = frame.to_array()

        logger.info(f"Saving positions to {filepath}")
        if fmt == 'npy':
            np.save(filepath, positions)
        else:
            np.savez_compressed(filepath, positions=positions,
                                free_index=np.asarray(traj.header.free_index, dtype=np.int32))
        return filepath

    def save_atom(self, traj: Trajectory, atom: int, filename: Optional[str] = None) -> Path:
        """
        Save the time series of one free atom as a (n_frames, 3) array.

        Args:
            traj: Open trajectory
            atom: Free-atom index
            filename: Optional custom filename (default: '<stem>.atom<N>.npy')
        """
        if filename is None:
            filename = f"{traj.path.stem}.atom{atom}.npy"
        filepath = self.output_dir / filename
        logger.info(f"Saving atom {atom} series to {filepath}")
        np.save(filepath, traj.atom(atom).to_array())
        return filepath

    def save_header(self, header: TrajectoryHeader, filename: Optional[str] = None) -> Path:
        """
        Save header metadata to a YAML file.

        Args:
            header: Decoded trajectory header
            filename: Optional custom filename (default: 'header.yaml')
        """
        if filename is None:
            filename = 'header.yaml'
        filepath = self.output_dir / filename

        logger.info(f"Saving header to {filepath}")
        with open(filepath, 'w') as f:
            yaml.safe_dump(header.to_dict(), f, default_flow_style=False, sort_keys=False)
        return filepath
