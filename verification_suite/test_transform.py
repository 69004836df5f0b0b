"""Affine view transform algebra."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

BASE = Path(__file__).resolve().parents[1]
if str(BASE) not in sys.path:
    sys.path.insert(0, str(BASE))

from board.errors import InvariantError  # noqa: E402
from board.transform import ViewTransform  # noqa: E402


def test_identity_maps_points_to_themselves() -> None:
    t = ViewTransform.identity()
    assert t.apply((3.5, -2.0)) == (3.5, -2.0)
    assert t.unapply((3.5, -2.0)) == (3.5, -2.0)


def test_append_translation_acts_in_screen_space() -> None:
    t = ViewTransform.scaling(10.0).append_translation((5.0, 7.0))
    assert t.apply((1.0, 1.0)) == pytest.approx((15.0, 17.0))


def test_prepend_translation_acts_in_grid_space() -> None:
    t = ViewTransform.scaling(10.0).prepend_translation((2.0, 0.0))
    assert t.apply((1.0, 1.0)) == pytest.approx((30.0, 10.0))


def test_unapply_inverts_apply() -> None:
    t = ViewTransform.scaling((4.0, 8.0)).append_translation((-13.0, 21.0))
    for point in [(0.0, 0.0), (1.25, -3.5), (100.0, 42.0)]:
        assert t.unapply(t.apply(point)) == pytest.approx(point)


def test_scale_reports_each_axis() -> None:
    t = ViewTransform.scaling((3.0, 5.0)).append_translation((9.0, 9.0))
    assert t.scale() == pytest.approx((3.0, 5.0))


def test_axis_aligned_only_for_pan_and_zoom() -> None:
    assert ViewTransform.scaling((3.0, 5.0)).append_translation((9.0, -1.0)).is_axis_aligned()
    sheared = ViewTransform.from_coefficients([1.0, 0.5, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0])
    assert not sheared.is_axis_aligned()
    projective = ViewTransform.from_coefficients([1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 2.0])
    assert not projective.is_axis_aligned()


def test_degenerate_transform_cannot_be_inverted() -> None:
    t = ViewTransform.scaling(0.0)
    with pytest.raises(InvariantError):
        t.unapply((1.0, 1.0))


def test_inverse_is_cached() -> None:
    t = ViewTransform.scaling(2.0)
    assert t.inverse() is t.inverse()


def test_matrix_is_read_only() -> None:
    t = ViewTransform.scaling(2.0)
    with pytest.raises(ValueError):
        t.matrix[0, 0] = 5.0


def test_coefficients_round_trip_exactly() -> None:
    t = ViewTransform.scaling(1.0 / 3.0).append_translation((0.1, 123456.789))
    again = ViewTransform.from_coefficients(t.coefficients())
    assert again == t
    assert np.array_equal(again.matrix, t.matrix)


def test_bad_coefficients() -> None:
    with pytest.raises(ValueError):
        ViewTransform.from_coefficients([1.0, 0.0])
    with pytest.raises(ValueError):
        ViewTransform.from_coefficients([float("nan")] * 9)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-q"]))
