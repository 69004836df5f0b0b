"""Homogeneous 2D affine transform between grid units and screen pixels."""
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from .errors import InvariantError

Vec2 = Tuple[float, float]
ScaleArg = Union[float, Vec2]


def _translation_matrix(dx: float, dy: float) -> np.ndarray:
    m = np.identity(3)
    m[0, 2] = dx
    m[1, 2] = dy
    return m


def _scaling_matrix(factor: ScaleArg) -> np.ndarray:
    if isinstance(factor, tuple):
        sx, sy = factor
    else:
        sx = sy = factor
    return np.diag([float(sx), float(sy), 1.0])


class ViewTransform:
    """Immutable 3x3 affine map (translation and per-axis scale only).

    ``append_*`` applies the new step after the existing map (screen side),
    ``prepend_*`` applies it before (grid side). The inverse is computed lazily
    and cached with the instance.
    """

    __slots__ = ("_matrix", "_inverse")

    def __init__(self, matrix: Optional[np.ndarray] = None) -> None:
        m = np.identity(3) if matrix is None else np.array(matrix, dtype=np.float64)
        if m.shape != (3, 3):
            raise InvariantError(f"transform must be 3x3, got shape {m.shape}")
        m.setflags(write=False)
        self._matrix = m
        self._inverse: Optional[np.ndarray] = None

    @classmethod
    def identity(cls) -> "ViewTransform":
        return cls()

    @classmethod
    def scaling(cls, factor: ScaleArg) -> "ViewTransform":
        return cls(_scaling_matrix(factor))

    @classmethod
    def translation(cls, dx: float, dy: float) -> "ViewTransform":
        return cls(_translation_matrix(dx, dy))

    @classmethod
    def from_coefficients(cls, values: Iterable[float]) -> "ViewTransform":
        """Rebuild from the nine row-major coefficients of :meth:`coefficients`."""
        flat = [float(v) for v in values]
        if len(flat) != 9:
            raise ValueError(f"expected 9 transform coefficients, got {len(flat)}")
        if not all(math.isfinite(v) for v in flat):
            raise ValueError("transform coefficients must be finite")
        return cls(np.array(flat, dtype=np.float64).reshape(3, 3))

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def coefficients(self) -> List[float]:
        return [float(v) for v in self._matrix.reshape(-1)]

    # --- composition -----------------------------------------------------

    def append_translation(self, delta: Vec2) -> "ViewTransform":
        return ViewTransform(_translation_matrix(delta[0], delta[1]) @ self._matrix)

    def prepend_translation(self, delta: Vec2) -> "ViewTransform":
        return ViewTransform(self._matrix @ _translation_matrix(delta[0], delta[1]))

    def append_scaling(self, factor: ScaleArg) -> "ViewTransform":
        return ViewTransform(_scaling_matrix(factor) @ self._matrix)

    # --- queries ---------------------------------------------------------

    def scale(self) -> Vec2:
        """Length of each basis column of the linear part."""
        m = self._matrix
        return (float(math.hypot(m[0, 0], m[1, 0])), float(math.hypot(m[0, 1], m[1, 1])))

    def offset(self) -> Vec2:
        return (float(self._matrix[0, 2]), float(self._matrix[1, 2]))

    def is_axis_aligned(self) -> bool:
        """True when the map is translation and per-axis scale only."""
        m = self._matrix
        return bool(m[0, 1] == 0.0 and m[1, 0] == 0.0 and m[2, 0] == 0.0 and m[2, 1] == 0.0 and m[2, 2] == 1.0)

    def inverse(self) -> np.ndarray:
        if self._inverse is None:
            m = self._matrix
            det = m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
            if det == 0.0 or not math.isfinite(det):
                raise InvariantError(f"transform is not invertible (det={det})")
            inv = np.linalg.inv(m)
            inv.setflags(write=False)
            self._inverse = inv
        return self._inverse

    def apply(self, point: Vec2) -> Vec2:
        """Grid-space point to screen pixels."""
        v = self._matrix @ np.array([point[0], point[1], 1.0])
        return (float(v[0]), float(v[1]))

    def unapply(self, point: Vec2) -> Vec2:
        """Screen pixels to grid-space point."""
        v = self.inverse() @ np.array([point[0], point[1], 1.0])
        return (float(v[0]), float(v[1]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ViewTransform):
            return NotImplemented
        return bool(np.array_equal(self._matrix, other._matrix))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        sx, sy = self.scale()
        tx, ty = self.offset()
        return f"ViewTransform(scale=({sx:.3f}, {sy:.3f}), offset=({tx:.3f}, {ty:.3f}))"


__all__ = ["ViewTransform", "Vec2"]
