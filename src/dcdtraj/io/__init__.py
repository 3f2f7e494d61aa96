"""
Input/Output module for dcdtraj.

This module decodes DCD trajectory headers, opens trajectories for random
access, repairs stale frame counts and exports coordinates.
"""

from .decoder import probe_byte_order, read_header
from .loader import DCDLoader, open_dcd
from .repair import repair
from .writer import TrajectoryWriter

__all__ = ['probe_byte_order', 'read_header', 'DCDLoader', 'open_dcd', 'repair', 'TrajectoryWriter']
