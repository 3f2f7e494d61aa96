import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest


def build_dcd_bytes(coords, order='<', fixed_atoms=0, free_index=None, title=("Synthetic trajectory",),
                    n_frames=None, t0=0, steps_per_frame=10, dt=0.02045, end_marker=84,
                    title_end=None, natoms_markers=(4, 4), free_markers=None):
    """
    Assemble a 32-bit DCD file in memory.

    coords has shape (frames, free_atoms, 3). Keyword arguments let tests
    corrupt individual fields.
    """
    coords = np.asarray(coords, dtype=np.float32)
    frames, free_atoms, _ = coords.shape
    i4, f4 = np.dtype(order + 'i4'), np.dtype(order + 'f4')

    def ints(*values):
        return np.array(values, dtype=i4).tobytes()

    pre = bytearray(92)
    pre[0:4] = ints(84)
    pre[4:8] = b"CORD"
    pre[8:12] = ints(frames if n_frames is None else n_frames)
    pre[12:16] = ints(t0)
    pre[16:20] = ints(steps_per_frame)
    pre[40:44] = ints(fixed_atoms)
    pre[44:48] = np.array(dt, dtype=f4).tobytes()
    pre[88:92] = ints(end_marker)

    text = b"".join(line.encode('latin-1').ljust(80) for line in title)
    block = 4 + 80 * len(title)
    out = bytearray(pre)
    out += ints(block, len(title)) + text + ints(block if title_end is None else title_end)
    out += ints(natoms_markers[0], free_atoms + fixed_atoms, natoms_markers[1])

    if fixed_atoms:
        if free_index is None:
            free_index = list(range(1, free_atoms + 1))
        start, end = free_markers or (4 * free_atoms, 4 * free_atoms)
        out += ints(start) + np.asarray(free_index, dtype=i4).tobytes() + ints(end)

    for frame in coords:
        for axis in range(3):
            out += ints(4 * free_atoms) + frame[:, axis].astype(f4).tobytes() + ints(4 * free_atoms)
    return bytes(out)


def sample_coords(frames=4, atoms=5):
    t = np.arange(frames, dtype=np.float32)[:, None]
    a = np.arange(atoms, dtype=np.float32)[None, :]
    return np.stack([t * 100 + a, t * 100 + a + 0.25, -(t * 100 + a) - 0.5], axis=-1)


@pytest.fixture
def write_dcd(tmp_path):
    """Factory writing a synthetic DCD file and returning its path."""
    def _write(coords=None, name="traj.dcd", **kwargs):
        if coords is None:
            coords = sample_coords()
        path = tmp_path / name
        path.write_bytes(build_dcd_bytes(coords, **kwargs))
        return path
    return _write
