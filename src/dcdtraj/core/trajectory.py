"""
Random-access view over the frames of an open DCD trajectory.

Coordinates are never loaded up front. A ``Trajectory`` keeps one read-only
memory map of the file; ``Frame`` and ``AtomSeries`` compute byte offsets into
it and copy out only the values that are asked for.

Frame layout (``F`` free atoms, 4-byte little/big endian words)::

    [F*4] x_0 .. x_{F-1} [F*4]  [F*4] y_0 .. [F*4]  [F*4] z_0 .. [F*4]

so each axis block spans ``8 + 4*F`` bytes and a frame ``12*F + 24`` bytes.
"""
from collections.abc import Sequence
import logging
import mmap
import operator
import threading
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Tuple
import numpy as np

from .coord import Coord
from .errors import DCDFormatError
from .header import TrajectoryHeader

logger = logging.getLogger(__name__)


def _check_index(index, size: int, what: str) -> int:
    index = operator.index(index)
    if not 0 <= index < size:
        raise IndexError(f"{what} index {index} out of range [0, {size}).")
    return index


class Frame(Sequence):
    """Coordinates of every free atom at one time step."""

    def __init__(self, trajectory: 'Trajectory', index: int):
        self._trajectory = trajectory
        self.index = index
        self.offset = trajectory.header.frame_offset(index)

    def __len__(self) -> int:
        return self._trajectory.header.free_atoms

    def __getitem__(self, atom) -> Coord:
        atom = _check_index(atom, len(self), "Atom")
        x, y, z = self._trajectory._read(self.offset + 4 + 4 * atom, (3,), (self._trajectory.axis_stride,))
        return Coord(float(x), float(y), float(z))

    def to_array(self) -> np.ndarray:
        """Copy of the frame as a (free_atoms, 3) float32 array."""
        traj = self._trajectory
        return traj._read(self.offset + 4, (len(self), 3), (4, traj.axis_stride))

    def __repr__(self) -> str:
        return f"Frame(index={self.index}, atoms={len(self)})"


class AtomSeries(Sequence):
    """Position of one free atom across all frames."""

    def __init__(self, trajectory: 'Trajectory', atom: int):
        self._trajectory = trajectory
        self.atom = atom

    @property
    def trajectory(self) -> 'Trajectory':
        return self._trajectory

    def __len__(self) -> int:
        return self._trajectory.header.n_frames

    def __getitem__(self, time_index) -> Coord:
        time_index = _check_index(time_index, len(self), "Frame")
        return self._trajectory.frame(time_index)[self.atom]

    def to_array(self) -> np.ndarray:
        """Copy of the series as a (n_frames, 3) float32 array."""
        traj = self._trajectory
        traj._require_on_disk(len(self))
        return traj._read(traj.header.frames_start + 4 + 4 * self.atom,
                          (len(self), 3), (traj.header.frame_bytes, traj.axis_stride))

    def __repr__(self) -> str:
        return f"AtomSeries(atom={self.atom}, frames={len(self)})"


class Trajectory:
    """
    Open DCD trajectory handle.

    Owns the file object and its memory map. Views returned by ``frame`` and
    ``atom`` borrow from the handle and stop working once it is closed.
    """

    def __init__(self, path: Path, fileobj: BinaryIO, mapped: mmap.mmap, header: TrajectoryHeader):
        self.path = Path(path)
        self.header = header
        self.axis_stride = 8 + 4 * header.free_atoms
        self._file: Optional[BinaryIO] = fileobj
        self._mmap: Optional[mmap.mmap] = mapped
        self._size = len(mapped)
        self._dtype = header.byte_order.dtype('f4')
        self._frames: Dict[int, Frame] = {}
        self._lock = threading.Lock()

        if header.n_frames < 0:
            raise DCDFormatError(f"Negative frame count {header.n_frames} in header of '{self.path.name}'; "
                                 f"run repair() to restore it.")
        if self.frames_on_disk != header.n_frames:
            logger.warning(f"{self.path.name}: header declares {header.n_frames} frames but file holds "
                           f"{self.frames_on_disk}. Use repair() if the header is stale.")

    @property
    def n_frames(self) -> int:
        return self.header.n_frames

    @property
    def n_atoms(self) -> int:
        return self.header.n_atoms

    @property
    def free_atoms(self) -> int:
        return self.header.free_atoms

    @property
    def fixed_atoms(self) -> int:
        return self.header.fixed_atoms

    @property
    def frames_on_disk(self) -> int:
        return max(self._size - self.header.frames_start, 0) // self.header.frame_bytes

    @property
    def closed(self) -> bool:
        return self._mmap is None

    def frame(self, index: int) -> Frame:
        self._check_open()
        index = _check_index(index, self.n_frames, "Frame")
        cached = self._frames.get(index)
        if cached is not None:
            return cached
        self._require_on_disk(index + 1)
        with self._lock:
            return self._frames.setdefault(index, Frame(self, index))

    def atom(self, index: int) -> AtomSeries:
        self._check_open()
        return AtomSeries(self, _check_index(index, self.free_atoms, "Atom"))

    def positions(self) -> np.ndarray:
        """All coordinates as a (n_frames, free_atoms, 3) float32 array."""
        self._require_on_disk(self.n_frames)
        return self._read(self.header.frames_start + 4,
                          (self.n_frames, self.free_atoms, 3),
                          (self.header.frame_bytes, 4, self.axis_stride))

    def __len__(self) -> int:
        return self.n_frames

    def __bool__(self) -> bool:
        # A handle is truthy even when its header counts zero frames.
        return True

    def __iter__(self) -> Iterator[Frame]:
        for i in range(self.n_frames):
            yield self.frame(i)

    def close(self) -> None:
        if self._mmap is None:
            return
        self._frames.clear()
        self._mmap.close()
        self._mmap = None
        self._file.close()
        self._file = None
        logger.debug(f"Closed {self.path.name}")

    def __enter__(self) -> 'Trajectory':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (f"Trajectory('{self.path.name}', frames={self.n_frames}, atoms={self.n_atoms}, "
                f"free={self.free_atoms}, {state})")

    def _check_open(self) -> None:
        if self._mmap is None:
            raise ValueError("I/O operation on closed trajectory.")

    def _require_on_disk(self, n: int) -> None:
        self._check_open()
        if n > self.frames_on_disk:
            raise DCDFormatError(f"Frame {n - 1} extends past end of file '{self.path.name}' "
                                 f"({self.frames_on_disk} complete frames on disk).")

    def _read(self, offset: int, shape: Tuple[int, ...], strides: Tuple[int, ...]) -> np.ndarray:
        # The strided view exports the map's buffer; copying releases it right away so close() stays possible.
        self._check_open()
        if 0 in shape:
            return np.empty(shape, dtype=np.float32)
        view = np.ndarray(shape, dtype=self._dtype, buffer=self._mmap, offset=offset, strides=strides)
        out = view.astype(np.float32)
        del view
        return out
