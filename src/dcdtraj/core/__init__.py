"""
Core module for dcdtraj.

This module provides the coordinate and header value types and the
frame-access engine behind an open trajectory.
"""

from .coord import Coord
from .errors import DCDError, DCDFormatError
from .header import ByteOrder, Scale, TrajectoryHeader, HeaderBuilder
from .trajectory import Trajectory, Frame, AtomSeries

__all__ = [
    'Coord',
    'DCDError',
    'DCDFormatError',
    'ByteOrder',
    'Scale',
    'TrajectoryHeader',
    'HeaderBuilder',
    'Trajectory',
    'Frame',
    'AtomSeries',
]
