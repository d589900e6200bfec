import math

import numpy as np
import pytest

from rollercoaster.model.curve import VELOCITY
from rollercoaster.model.frame import DegenerateFrameError, build_frame
from rollercoaster.model.geometry_primitives import Y_AXIS, rotate_about_axis
from rollercoaster.model.tilt import (
    MIN_CURVATURE_SPEED,
    TiltMode,
    apply_tilt,
    compute_curvature,
    legacy_up_y,
)


def assert_orthonormal(frame):
    vectors = (frame.tangent_normal, frame.lateral, frame.vertical)
    for v in vectors:
        assert math.isclose(np.linalg.norm(v), 1.0, abs_tol=1e-9)
    assert abs(np.dot(frame.tangent_normal, frame.lateral)) < 1e-9
    assert abs(np.dot(frame.tangent_normal, frame.vertical)) < 1e-9
    assert abs(np.dot(frame.lateral, frame.vertical)) < 1e-9


def test_frame_along_track_is_orthonormal(evaluator):
    for u in evaluator.parameter_range(0.37):
        assert_orthonormal(build_frame(evaluator.evaluate(u, VELOCITY), Y_AXIS))


def test_frame_with_tilted_up_is_orthonormal():
    up = np.array([0.3, 0.9, -0.2])
    frame = build_frame(np.array([2.0, -1.0, 4.0]), up)
    assert_orthonormal(frame)


def test_frame_directions():
    frame = build_frame(np.array([0.0, 0.0, 5.0]), Y_AXIS)
    np.testing.assert_allclose(frame.tangent_normal, [0.0, 0.0, -1.0])
    np.testing.assert_allclose(frame.lateral, np.cross(Y_AXIS, [0.0, 0.0, -1.0]))
    np.testing.assert_allclose(frame.vertical, [0.0, 1.0, 0.0])


def test_zero_velocity_is_degenerate():
    with pytest.raises(DegenerateFrameError):
        build_frame(np.zeros(3), Y_AXIS)


def test_up_parallel_to_velocity_is_degenerate():
    with pytest.raises(DegenerateFrameError):
        build_frame(np.array([0.0, -3.0, 0.0]), Y_AXIS)


def test_curvature_is_zero_below_speed_threshold():
    acc = np.array([100.0, 5.0, -50.0])
    assert compute_curvature(np.array([MIN_CURVATURE_SPEED, 0.0, 0.0]), acc) == 0.0
    assert compute_curvature(np.array([0.004, 0.0, 0.005]), acc) == 0.0
    assert compute_curvature(np.zeros(3), acc) == 0.0


def test_curvature_of_horizontal_circle():
    # Circle of radius r in the x-z plane: |k| = 1 / r
    r, phi = 4.0, 0.7
    vel = np.array([-r * math.sin(phi), 0.0, r * math.cos(phi)])
    acc = np.array([-r * math.cos(phi), 0.0, -r * math.sin(phi)])
    assert math.isclose(compute_curvature(vel, acc), -1.0 / r)
    assert math.isclose(compute_curvature(-vel, acc), 1.0 / r)


def test_curvature_ignores_vertical_component():
    vel = np.array([1.0, 0.0, 0.0])
    acc = np.array([0.0, 7.0, 0.0])
    assert compute_curvature(vel, acc) == 0.0


def test_zero_curvature_keeps_up():
    axis = np.array([0.0, 0.0, -1.0])
    np.testing.assert_allclose(apply_tilt(0.0, axis, Y_AXIS), Y_AXIS)


def test_full_tilt_rotates_about_tangent():
    axis = np.array([0.0, 0.0, 1.0])
    tilted = apply_tilt(math.pi / 2, axis, Y_AXIS, TiltMode.FULL)
    np.testing.assert_allclose(tilted, [-1.0, 0.0, 0.0], atol=1e-12)


def test_full_tilt_preserves_length_and_compounds():
    axis = np.array([0.6, 0.0, -0.8])
    once = apply_tilt(0.2, axis, Y_AXIS, TiltMode.FULL)
    twice = apply_tilt(0.2, axis, once, TiltMode.FULL)
    assert math.isclose(np.linalg.norm(twice), 1.0)
    np.testing.assert_allclose(twice, rotate_about_axis(Y_AXIS, axis, 0.4), atol=1e-12)


def test_rodrigues_formula():
    v = np.array([1.0, 2.0, 3.0])
    axis = np.array([1.0, 1.0, 0.0]) / math.sqrt(2.0)
    a = 0.8
    expected = (v * math.cos(a) + np.cross(axis, v) * math.sin(a)
                + axis * np.dot(axis, v) * (1 - math.cos(a)))
    np.testing.assert_allclose(rotate_about_axis(v, axis, a), expected, atol=1e-12)


def test_legacy_tilt_keeps_only_y():
    axis = np.array([0.6, 0.0, -0.8])
    tilted = apply_tilt(0.3, axis, Y_AXIS, TiltMode.LEGACY)
    assert tilted[0] == 0.0 and tilted[2] == 0.0
    assert math.isclose(tilted[1], legacy_up_y(0.3, axis))


def test_legacy_tilt_is_identity_without_curvature():
    axis = np.array([0.0, 0.0, 1.0])
    assert math.isclose(legacy_up_y(0.0, axis), 1.0)
