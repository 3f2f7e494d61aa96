#!/usr/bin/env python3
"""
Basic DCD Access Example

This script opens a DCD trajectory, prints its header and reads a few
coordinates through the frame and atom views without loading the file.
"""

import sys
from pathlib import Path

from dcdtraj import open_dcd

def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("trajectory.dcd")

    with open_dcd(path) as traj:
        header = traj.header
        print(f"{path.name}: {traj.n_frames} frames, {traj.n_atoms} atoms "
              f"({traj.free_atoms} free, {traj.fixed_atoms} fixed)")
        print(f"Timestep: {header.timestep_fs:.3f} fs, {header.steps_per_frame} steps per frame")
        for line in header.title_lines:
            print(f"  {line}")

        if traj.n_frames == 0:
            print("No frames recorded in header; try examples/repair_and_export.py")
            return

        # All free atoms at the last frame
        last = traj.frame(traj.n_frames - 1)
        print(f"First atoms of frame {last.index}:")
        for i in range(min(3, len(last))):
            print(f"  {i}: {last[i]}")

        # One atom across all frames
        atom0 = traj.atom(0)
        displacement = atom0[len(atom0) - 1] - atom0[0]
        print(f"Atom 0 moved {displacement.length:.3f} A over the trajectory")

if __name__ == "__main__":
    main()
