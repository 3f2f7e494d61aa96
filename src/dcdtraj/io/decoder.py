"""
DCD header decoding.

The header is a sequence of Fortran unformatted records, each framed by a
4-byte length marker before and after its payload:

    offset  0   84 | "CORD" | 20 int32 control words + float dt | 84
    offset 92   4 + 80*N | N | N title lines of 80 chars | 4 + 80*N
    next        4 | n_atoms | 4
    optional    4*F | F free-atom ids | 4*F     (only if fixed atoms exist)

There is no endianness flag; it is inferred from which byte order makes the
leading marker read as 84.
"""
import logging
from typing import Tuple, Union
import mmap
import numpy as np

from ..core.errors import DCDFormatError
from ..core.header import ByteOrder, Scale, HeaderBuilder, TrajectoryHeader

logger = logging.getLogger(__name__)

Buffer = Union[bytes, bytearray, mmap.mmap]

HEADER_MARKER = 84
CORD = b"CORD"
PREAMBLE_SIZE = 92
TITLE_LINE = 80
TITLE_START = 92


def _preamble_dtype(order: ByteOrder) -> np.dtype:
    i4, f4 = order.dtype('i4'), order.dtype('f4')
    return np.dtype({
        'names': ['n_frames', 't0', 'steps_per_frame', 'fixed_atoms', 'dt', 'end_marker'],
        'formats': [i4, i4, i4, i4, f4, i4],
        'offsets': [8, 12, 16, 40, 44, 88],
        'itemsize': PREAMBLE_SIZE,
    })


def _chunk(buf: Buffer, offset: int, size: int) -> bytes:
    data = buf[offset:offset + size]
    if len(data) != size:
        raise DCDFormatError(f"Unexpected end of file: needed {size} bytes at offset {offset}.")
    return bytes(data)


def _int32(buf: Buffer, offset: int, order: ByteOrder) -> int:
    return int(np.frombuffer(_chunk(buf, offset, 4), dtype=order.dtype('i4'))[0])


def probe_byte_order(magic: bytes) -> Tuple[ByteOrder, Scale]:
    """
    Detect byte order and coordinate scale from the first 8 bytes of a file.

    Big endian is tried first, then little endian.

    Returns:
        (ByteOrder, Scale) for the first byte order whose markers check out

    Raises:
        DCDFormatError: If neither byte order yields a DCD magic header
    """
    if len(magic) < 8:
        raise DCDFormatError("File too short to hold a DCD header.")
    tag = bytes(magic[4:8])
    for order in (ByteOrder.BIG, ByteOrder.LITTLE):
        m1, m2 = (int(v) for v in np.frombuffer(bytes(magic[:8]), dtype=order.dtype('i4')))
        if m1 + m2 == HEADER_MARKER:
            return order, Scale.SCALE64
        if m1 == HEADER_MARKER and tag == CORD:
            return order, Scale.SCALE32
    raise DCDFormatError("Not a recognized DCD file: bad magic header.")


def _decode_preamble(buf: Buffer, hdr: HeaderBuilder) -> None:
    rec = np.frombuffer(_chunk(buf, 0, PREAMBLE_SIZE), dtype=_preamble_dtype(hdr.byte_order))[0]
    if int(rec['end_marker']) != HEADER_MARKER:
        raise DCDFormatError("Invalid header block ending.")
    hdr.n_frames = int(rec['n_frames'])
    hdr.t0 = int(rec['t0'])
    hdr.steps_per_frame = int(rec['steps_per_frame'])
    hdr.fixed_atoms = int(rec['fixed_atoms'])
    hdr.dt = float(rec['dt'])


def _decode_title(buf: Buffer, hdr: HeaderBuilder) -> int:
    """Read the title record; returns the offset just past it."""
    order = hdr.byte_order
    block_size = _int32(buf, TITLE_START, order)
    if (block_size - 4) % TITLE_LINE != 0:
        raise DCDFormatError("Invalid title block start.")
    n_lines = _int32(buf, TITLE_START + 4, order)
    title_bytes = n_lines * TITLE_LINE
    if title_bytes < 0:
        raise DCDFormatError(f"Invalid title line count: {n_lines}.")
    pos = TITLE_START + 8
    hdr.title = _chunk(buf, pos, title_bytes).decode('latin-1')
    pos += title_bytes
    if _int32(buf, pos, order) != block_size:
        raise DCDFormatError("Invalid title block end.")
    return pos + 4


def _decode_atom_count(buf: Buffer, hdr: HeaderBuilder, pos: int) -> int:
    order = hdr.byte_order
    if _int32(buf, pos, order) != 4:
        raise DCDFormatError("Invalid atom-count block start.")
    hdr.n_atoms = _int32(buf, pos + 4, order)
    if _int32(buf, pos + 8, order) != 4:
        raise DCDFormatError("Invalid atom-count block end.")
    hdr.free_atoms = hdr.n_atoms - hdr.fixed_atoms
    if hdr.free_atoms < 0:
        raise DCDFormatError(f"Fixed atom count {hdr.fixed_atoms} exceeds total atom count {hdr.n_atoms}.")
    return pos + 12


def _decode_free_index(buf: Buffer, hdr: HeaderBuilder, pos: int) -> int:
    if hdr.fixed_atoms == 0:
        return pos
    order = hdr.byte_order
    block_size = 4 * hdr.free_atoms
    if _int32(buf, pos, order) != block_size:
        raise DCDFormatError("Invalid free-atom index block start.")
    ids = np.frombuffer(_chunk(buf, pos + 4, block_size), dtype=order.dtype('i4'))
    hdr.free_index = tuple(int(i) for i in ids)
    pos += 4 + block_size
    if _int32(buf, pos, order) != block_size:
        raise DCDFormatError("Invalid free-atom index block end.")
    return pos + 4


def read_header(buf: Buffer) -> TrajectoryHeader:
    """
    Decode every header block of a DCD file.

    Args:
        buf: File contents (bytes or a memory map); only the header region is read

    Returns:
        Validated TrajectoryHeader

    Raises:
        DCDFormatError: On any magic, marker or framing mismatch
    """
    hdr = HeaderBuilder()
    hdr.byte_order, hdr.scale = probe_byte_order(buf[:8])
    if hdr.scale is Scale.SCALE64:
        raise DCDFormatError("64-bit DCD files are unsupported.")
    logger.debug(f"Detected {hdr.byte_order.name.lower()}-endian 32-bit DCD.")

    _decode_preamble(buf, hdr)
    pos = _decode_title(buf, hdr)
    pos = _decode_atom_count(buf, hdr, pos)
    hdr.frames_start = _decode_free_index(buf, hdr, pos)

    header = hdr.build()
    logger.debug(f"Header: {header.n_frames} frames, {header.n_atoms} atoms "
                 f"({header.fixed_atoms} fixed), frames start at byte {header.frames_start}, "
                 f"{header.frame_bytes} bytes per frame.")
    return header
