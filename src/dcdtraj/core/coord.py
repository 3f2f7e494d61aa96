"""
Coordinate value type for atom positions.
"""
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class Coord:
    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> 'Coord':
        return Coord(0.0, 0.0, 0.0)

    def __add__(self, other: 'Coord') -> 'Coord':
        return Coord(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Coord') -> 'Coord':
        return Coord(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, c: float) -> 'Coord':
        return Coord(self.x * c, self.y * c, self.z * c)

    __rmul__ = __mul__

    def __truediv__(self, c: float) -> 'Coord':
        return Coord(self.x / c, self.y / c, self.z / c)

    @property
    def r2(self) -> float:
        """x**2 + y**2 + z**2"""
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def length(self) -> float:
        return float(np.sqrt(self.r2))

    def wrap(self, box_min: 'Coord', box_width: 'Coord') -> 'Coord':
        """
        Place the point inside a periodic box.

        Args:
            box_min: Lower corner of the box
            box_width: Box edge lengths along x, y and z

        Returns:
            Coord lying in [box_min, box_min + box_width) on every axis
        """
        return Coord(
            _wrap_axis(self.x, box_min.x, box_width.x),
            _wrap_axis(self.y, box_min.y, box_width.y),
            _wrap_axis(self.z, box_min.z, box_width.z),
        )

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float32)


def _wrap_axis(value: float, lo: float, width: float) -> float:
    if width <= 0:
        raise ValueError(f"Box width must be positive, got {width}.")
    return ((value - lo) % width + width) % width + lo
