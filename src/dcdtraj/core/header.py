"""
Decoded DCD header and the builder used while the header blocks are read.
"""
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Optional, Tuple, List, Dict, Any
import numpy as np

# AKMA time unit in femtoseconds
AKMA_TIME_FS = 48.88821


class ByteOrder(Enum):
    LITTLE = '<'
    BIG = '>'

    def dtype(self, code: str) -> np.dtype:
        return np.dtype(self.value + code)


class Scale(Enum):
    SCALE32 = 32
    SCALE64 = 64


def frame_size(free_atoms: int) -> int:
    """Bytes per frame: three axis blocks of 4*free_atoms floats, each framed by two 4-byte markers."""
    return 12 * free_atoms + 24


@dataclass(frozen=True)
class TrajectoryHeader:
    byte_order: ByteOrder
    scale: Scale
    n_frames: int
    t0: int
    steps_per_frame: int
    free_atoms: int
    fixed_atoms: int
    dt: float  # AKMA time units
    title: str
    n_atoms: int
    free_index: Tuple[int, ...]  # empty when every atom is free
    frame_bytes: int
    frames_start: int

    def __post_init__(self):
        if self.n_atoms != self.free_atoms + self.fixed_atoms:
            raise ValueError(
                f"Atom count mismatch: {self.n_atoms} total != {self.free_atoms} free + {self.fixed_atoms} fixed.")
        if self.frame_bytes != frame_size(self.free_atoms):
            raise ValueError(f"Frame size {self.frame_bytes} does not match {self.free_atoms} free atoms.")
        if self.fixed_atoms == 0 and self.free_index:
            raise ValueError("Free-atom index must be empty when no atoms are fixed.")
        if self.fixed_atoms > 0 and len(self.free_index) != self.free_atoms:
            raise ValueError(
                f"Free-atom index has {len(self.free_index)} entries, expected {self.free_atoms}.")

    @property
    def timestep_fs(self) -> float:
        return float(self.dt) * AKMA_TIME_FS

    @property
    def title_lines(self) -> List[str]:
        """Title split into its 80-character lines, trailing blanks removed."""
        return [self.title[i:i + 80].rstrip(' \x00') for i in range(0, len(self.title), 80)]

    def frame_offset(self, index: int) -> int:
        return self.frames_start + index * self.frame_bytes

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['byte_order'] = 'little' if self.byte_order is ByteOrder.LITTLE else 'big'
        d['scale'] = self.scale.value
        d['dt'] = float(self.dt)
        d['title'] = self.title_lines
        d['free_index'] = list(self.free_index)
        d['timestep_fs'] = self.timestep_fs
        return d


@dataclass
class HeaderBuilder:
    """Mutable accumulator filled block by block; frozen by build()."""
    byte_order: Optional[ByteOrder] = None
    scale: Optional[Scale] = None
    n_frames: Optional[int] = None
    t0: Optional[int] = None
    steps_per_frame: Optional[int] = None
    free_atoms: Optional[int] = None
    fixed_atoms: Optional[int] = None
    dt: Optional[float] = None
    title: Optional[str] = None
    n_atoms: Optional[int] = None
    free_index: Tuple[int, ...] = field(default_factory=tuple)
    frames_start: Optional[int] = None

    def build(self) -> TrajectoryHeader:
        missing = [f.name for f in fields(self) if getattr(self, f.name) is None]
        if missing:
            raise ValueError(f"Header incomplete, missing: {', '.join(missing)}")
        return TrajectoryHeader(
            byte_order=self.byte_order,
            scale=self.scale,
            n_frames=self.n_frames,
            t0=self.t0,
            steps_per_frame=self.steps_per_frame,
            free_atoms=self.free_atoms,
            fixed_atoms=self.fixed_atoms,
            dt=self.dt,
            title=self.title,
            n_atoms=self.n_atoms,
            free_index=tuple(self.free_index),
            frame_bytes=frame_size(self.free_atoms),
            frames_start=self.frames_start,
        )
