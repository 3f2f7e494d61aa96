"""
Opening DCD trajectory files.
"""
import logging
import mmap
from pathlib import Path
from typing import Union

from ..core.errors import DCDFormatError
from ..core.trajectory import Trajectory
from .decoder import read_header

logger = logging.getLogger(__name__)


class DCDLoader:
    def __init__(self, filename: Union[str, Path]):
        self.filepath = Path(filename)
        if not self.filepath.exists():
            raise FileNotFoundError(f"Trajectory file not found: {filename}")

    def load(self) -> Trajectory:
        """
        Open the file, memory-map it and decode its header.

        The file and map are released if decoding fails; on success they are
        owned by the returned Trajectory.
        """
        f = open(self.filepath, 'rb')
        mapped = None
        try:
            size = self.filepath.stat().st_size
            if size < 8:
                raise DCDFormatError(f"File too short to be a DCD trajectory: {size} bytes.")
            mapped = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)
            header = read_header(mapped)
            traj = Trajectory(self.filepath, f, mapped, header)
        except BaseException:
            if mapped is not None:
                mapped.close()
            f.close()
            raise

        logger.info(f"Opened '{self.filepath.name}': {header.n_frames} frames, {header.n_atoms} atoms "
                    f"({header.free_atoms} free, {header.fixed_atoms} fixed), "
                    f"{header.byte_order.name.lower()}-endian.")
        return traj


def open_dcd(path: Union[str, Path]) -> Trajectory:
    """Open a DCD file for random access. Use as a context manager or call close()."""
    return DCDLoader(path).load()
