import math

import numpy as np
import pytest

from rollercoaster.model.control_points import ClassicLoopTrack, ControlPointSet
from rollercoaster.model.physics import GRAVITY, SpeedProfile, speed_at, work_constant


def test_classic_track_max_height(control_points):
    assert control_points.max_height == 37.0
    assert control_points.count == 18
    assert control_points.parameter_domain == (3.0, 18.0)


def test_control_points_are_read_only(control_points):
    with pytest.raises(ValueError):
        control_points.points[0, 0] = 99.0


def test_seam_points_repeat_start(control_points):
    np.testing.assert_array_equal(control_points.points[15:18], control_points.points[0:3])


def test_too_few_control_points_rejected():
    with pytest.raises(ValueError):
        ControlPointSet([(0.0, 0.0, 0.0)] * 3)


def test_malformed_control_points_rejected():
    with pytest.raises(ValueError):
        ControlPointSet([(0.0, 0.0)] * 5)


def test_work_constant_for_classic_track():
    work = work_constant(37.0)
    assert math.isclose(work, GRAVITY * 37.0 + 3.0)
    assert work + GRAVITY * 37.0 >= 0
    assert work - GRAVITY * 37.0 >= 0


def test_speed_at_peak_of_budget_is_margin_only():
    work = work_constant(37.0, margin=3.0)
    assert math.isclose(speed_at(37.0, work), math.sqrt(6.0))


def test_speed_radicand_is_clamped():
    assert speed_at(1000.0, work_constant(37.0)) == 0.0


def test_speed_is_vectorised():
    speeds = speed_at(np.array([0.0, 10.0, 37.0]), work_constant(37.0))
    assert speeds.shape == (3,)
    assert speeds[0] > speeds[1] > speeds[2] > 0.0


def test_speed_profile_slowest_at_highest_point(evaluator):
    profile = SpeedProfile.from_evaluator(evaluator)
    assert len(profile.parameters) == len(profile.speeds) == len(profile.heights)
    assert np.all(np.isfinite(profile.speeds))
    assert np.all(profile.speeds >= 0.0)
    assert profile.slowest_index == int(np.argmax(profile.heights))
    assert profile.heights.max() <= ClassicLoopTrack().control_points().max_height
