import numpy as np
import pytest

from dcdtraj.core.header import (AKMA_TIME_FS, ByteOrder, HeaderBuilder, Scale, TrajectoryHeader,
                                 frame_size)
from dcdtraj.io.decoder import read_header
from conftest import build_dcd_bytes, sample_coords


@pytest.fixture
def header_fields():
    return dict(byte_order=ByteOrder.LITTLE, scale=Scale.SCALE32, n_frames=10, t0=0, steps_per_frame=100,
                free_atoms=3, fixed_atoms=2, dt=0.1, title="x" * 80, n_atoms=5, free_index=(0, 1, 4),
                frame_bytes=frame_size(3), frames_start=212)


def test_frame_size():
    """Test the frame size formula."""
    assert frame_size(0) == 24
    assert frame_size(10) == 144


def test_valid_header(header_fields):
    """Test frame offsets of a valid header."""
    header = TrajectoryHeader(**header_fields)
    assert header.frame_offset(0) == 212
    assert header.frame_offset(2) == 212 + 2 * frame_size(3)


@pytest.mark.parametrize("field, value, message", [
    ("n_atoms", 6, "Atom count mismatch"),
    ("frame_bytes", 48, "Frame size"),
    ("free_index", (0, 1), "Free-atom index has 2 entries"),
])
def test_header_invariants(header_fields, field, value, message):
    """Test header consistency checks."""
    header_fields[field] = value
    with pytest.raises(ValueError, match=message):
        TrajectoryHeader(**header_fields)


def test_free_index_must_be_empty_without_fixed_atoms(header_fields):
    """Test a free-atom index is refused when no atoms are fixed."""
    header_fields.update(fixed_atoms=0, n_atoms=3)
    with pytest.raises(ValueError, match="must be empty"):
        TrajectoryHeader(**header_fields)


def test_builder_refuses_incomplete_header():
    """Test building a header with missing fields."""
    hdr = HeaderBuilder(byte_order=ByteOrder.BIG, scale=Scale.SCALE32, n_frames=1)
    with pytest.raises(ValueError, match="missing: t0"):
        hdr.build()


def test_header_is_immutable(header_fields):
    """Test that headers cannot be modified."""
    header = TrajectoryHeader(**header_fields)
    with pytest.raises(AttributeError):
        header.n_frames = 3


def test_timestep_and_dict():
    """Test timestep conversion and dictionary export."""
    header = read_header(build_dcd_bytes(sample_coords(frames=2, atoms=2), order='>', dt=2.0,
                                         title=("REMARKS test  ",)))
    assert header.timestep_fs == pytest.approx(2.0 * AKMA_TIME_FS)
    d = header.to_dict()
    assert d['byte_order'] == 'big'
    assert d['scale'] == 32
    assert d['title'] == ["REMARKS test"]
    assert d['free_index'] == []
    assert d['n_frames'] == 2


@pytest.mark.parametrize("order, expected", [(ByteOrder.LITTLE, '<i4'), (ByteOrder.BIG, '>i4')])
def test_byte_order_dtype(order, expected):
    """Test ByteOrder builds numpy dtypes with its byte order."""
    assert order.dtype('i4') == np.dtype(expected)
    assert not hasattr(order, 'char')
