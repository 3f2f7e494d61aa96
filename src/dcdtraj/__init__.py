"""
dcdtraj: random access to DCD molecular-dynamics trajectories.
"""

__version__ = "0.1.0"

# Core components
from .core.coord import Coord
from .core.errors import DCDError, DCDFormatError
from .core.header import ByteOrder, Scale, TrajectoryHeader
from .core.trajectory import Trajectory, Frame, AtomSeries

# IO components
from .io.decoder import probe_byte_order, read_header
from .io.loader import DCDLoader, open_dcd
from .io.repair import repair
from .io.writer import TrajectoryWriter

open = open_dcd

__all__ = [
    # Core
    'Coord',
    'DCDError',
    'DCDFormatError',
    'ByteOrder',
    'Scale',
    'TrajectoryHeader',
    'Trajectory',
    'Frame',
    'AtomSeries',
    # IO
    'probe_byte_order',
    'read_header',
    'DCDLoader',
    'open_dcd',
    'open',
    'repair',
    'TrajectoryWriter',
]
