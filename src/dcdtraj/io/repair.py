"""
Frame-count repair for DCD files whose header count is stale.

Some simulation engines write a placeholder frame count and never update it.
The real count follows from the file size and the frame geometry.
"""
import logging
import mmap
import os
from pathlib import Path
from typing import Union
import numpy as np

from ..core.errors import DCDFormatError
from .decoder import read_header

logger = logging.getLogger(__name__)

FRAME_COUNT_OFFSET = 8


def repair(path: Union[str, Path]) -> int:
    """
    Rewrite the frame-count field of a DCD file from its actual size.

    Args:
        path: DCD file, must be writable

    Returns:
        The frame count written to the header

    Raises:
        DCDFormatError: If the header does not decode
        OSError: If the file cannot be opened for writing
    """
    path = Path(path)
    with open(path, 'r+b') as f:
        size = os.fstat(f.fileno()).st_size
        if size < 8:
            raise DCDFormatError(f"File too short to be a DCD trajectory: {size} bytes.")
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
            header = read_header(mapped)

        n_frames = (size - header.frames_start) // header.frame_bytes
        f.seek(FRAME_COUNT_OFFSET)
        f.write(np.array(n_frames, dtype=header.byte_order.dtype('i4')).tobytes())
        f.flush()

    if n_frames != header.n_frames:
        logger.info(f"Repaired '{path.name}': frame count {header.n_frames} -> {n_frames}.")
    else:
        logger.info(f"'{path.name}' frame count already correct ({n_frames}).")
    return n_frames
