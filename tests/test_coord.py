import numpy as np
import pytest

from dcdtraj.core.coord import Coord


def test_value_semantics():
    """Test Coord equality, hashing and immutability."""
    assert Coord(1.0, 2.0, 3.0) == Coord(1.0, 2.0, 3.0)
    assert hash(Coord(1.0, 2.0, 3.0)) == hash(Coord(1.0, 2.0, 3.0))
    assert Coord.zero() == Coord(0, 0, 0)
    with pytest.raises(AttributeError):
        Coord(1, 2, 3).x = 5


def test_arithmetic():
    """Test Coord vector arithmetic."""
    a, b = Coord(1, 2, 3), Coord(0.5, -1, 2)
    assert a + b == Coord(1.5, 1, 5)
    assert a - b == Coord(0.5, 3, 1)
    assert a * 2 == Coord(2, 4, 6)
    assert 2 * a == Coord(2, 4, 6)
    assert a / 2 == Coord(0.5, 1, 1.5)


def test_length():
    """Test squared and Euclidean length."""
    c = Coord(3, 4, 12)
    assert c.r2 == 169
    assert c.length == pytest.approx(13.0)


@pytest.mark.parametrize("point, expected", [
    (Coord(5, 5, 5), Coord(5, 5, 5)),
    (Coord(12, -3, 25), Coord(2, 7, 5)),
    (Coord(-10, 0, 10), Coord(0, 0, 0)),
])
def test_wrap_into_box(point, expected):
    """Test wrapping points into a periodic box."""
    wrapped = point.wrap(Coord(0, 0, 0), Coord(10, 10, 10))
    assert wrapped.x == pytest.approx(expected.x)
    assert wrapped.y == pytest.approx(expected.y)
    assert wrapped.z == pytest.approx(expected.z)


def test_wrap_with_offset_box():
    """Test wrapping into a box not anchored at the origin."""
    wrapped = Coord(-6, 0, 0).wrap(Coord(-5, -5, -5), Coord(10, 10, 10))
    assert wrapped.x == pytest.approx(4)


def test_wrap_rejects_empty_box():
    """Test wrapping with a zero box width."""
    with pytest.raises(ValueError, match="Box width must be positive"):
        Coord(1, 1, 1).wrap(Coord(0, 0, 0), Coord(0, 1, 1))


def test_to_array():
    """Test conversion to a float32 array."""
    arr = Coord(1, 2, 3).to_array()
    assert arr.dtype == np.float32
    np.testing.assert_array_equal(arr, [1, 2, 3])
