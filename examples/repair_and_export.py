#!/usr/bin/env python3
"""
Repair And Export Example

This script fixes a stale frame count in a DCD header, exports the
coordinates to .npy and plots the motion of one atom.
"""

import sys
from pathlib import Path

from dcdtraj import open_dcd, repair, TrajectoryWriter
from dcdtraj.visualization import AtomSeriesPlotter

def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("trajectory.dcd")
    output_dir = Path("dcd_output")

    print("Repairing frame count...")
    n_frames = repair(path)
    print(f"Header now declares {n_frames} frames")

    writer = TrajectoryWriter(output_dir)
    with open_dcd(path) as traj:
        writer.save_header(traj.header)
        writer.save_positions(traj, fmt='npz')
        if traj.free_atoms > 0 and traj.n_frames > 0:
            AtomSeriesPlotter(traj.atom(0), output_dir / "atom0.png", color_scheme='scientific').generate_plot()

    print(f"Export complete. Results saved in {output_dir}")

if __name__ == "__main__":
    main()
