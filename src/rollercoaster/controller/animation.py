"""
Animation Controller
====================
Advances the ride by one tick: moves the path parameter, updates the speed
readout and the banked world-up reference, and produces the camera pose.

Why is this file needed?
------------------------
1. Single writer: `RideController.tick` is the only code that produces a new
   `AnimationState`; the view just stores what it returns.
2. Testability: The tick runs without Qt or VTK, so the whole animation
   logic can be exercised from plain unit tests.
"""
from __future__ import annotations

from dataclasses import replace
import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from rollercoaster.config import RideSettings
from rollercoaster.logging_config import TICK_EXTRA
from rollercoaster.model.curve import CurveEvaluator, CurveSample
from rollercoaster.model.frame import DegenerateFrameError, build_frame
from rollercoaster.model.geometry_primitives import ORIGIN, Y_AXIS
from rollercoaster.model.physics import speed_at, work_constant
from rollercoaster.model.state import AnimationState, CameraMode, CameraPose
from rollercoaster.model.tilt import apply_tilt, compute_curvature

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def advance_parameter(u: float, step: float, lower: float, upper: float) -> float:
    """
    Move the path parameter forward by `step`, wrapping to exactly `lower`.

    The result always lies in ``[lower, upper)``.
    """
    u = u + step
    if u >= upper:
        u = lower
    return u


def orbit_pose(angle: float, radius: float, height: float) -> CameraPose:
    """External camera circling the origin at a fixed height."""
    eye = np.array([radius * math.cos(angle), height, -radius * math.sin(angle)])
    return CameraPose(eye=eye, focal_point=ORIGIN.copy(), up=Y_AXIS.copy())


def ride_pose(sample: CurveSample, world_up: npt.NDArray[np.float64], lift: float) -> CameraPose:
    """First-person camera above the rail, looking along the direction of travel."""
    eye = sample.position + np.array([0.0, lift, 0.0])
    return CameraPose(eye=eye, focal_point=sample.position + sample.velocity, up=np.array(world_up))


class RideController:
    """
    Drives the ride along one track.

    Args:
        evaluator: Curve of the track.
        settings: Step sizes, physics and camera constants.
    """
    def __init__(self, evaluator: CurveEvaluator, settings: RideSettings | None = None) -> None:
        self.evaluator = evaluator
        self.settings = settings or RideSettings()
        self.work = work_constant(
            evaluator.control_points.max_height,
            gravity=self.settings.gravity,
            margin=self.settings.work_margin,
        )
        logger.info(f"Ride controller ready: work constant {self.work:.2f}, "
                    f"tilt mode '{self.settings.tilt_mode.value}'.")

    def initial_state(self) -> AnimationState:
        return AnimationState(u=self.evaluator.lower)

    def _banked_up(self, sample: CurveSample, world_up: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """World up for the next tick; unchanged when the frame or the tilt is degenerate."""
        try:
            frame = build_frame(sample.velocity, world_up)
        except DegenerateFrameError as e:
            logger.debug(f"Skipping tilt update at u={sample.u:.3f}: {e}", extra=TICK_EXTRA)
            return world_up

        curvature = compute_curvature(sample.velocity, sample.acceleration)
        new_up = apply_tilt(curvature, frame.tangent_normal, world_up, self.settings.tilt_mode)
        if not np.all(np.isfinite(new_up)):
            logger.warning(f"Non-finite world up at u={sample.u:.3f}, keeping previous one.")
            return world_up
        return new_up

    def camera_pose(self, state: AnimationState, sample: CurveSample | None = None) -> CameraPose:
        """Pose of the active camera for `state`."""
        if state.camera_mode is CameraMode.ORBIT:
            return orbit_pose(state.orbit_angle, self.settings.orbit_radius, self.settings.orbit_height)
        if sample is None:
            sample = self.evaluator.sample(state.u)
        return ride_pose(sample, state.world_up, self.settings.camera_lift)

    def tick(self, state: AnimationState) -> tuple[AnimationState, CameraPose]:
        """
        Advance the ride by one animation tick.

        Args:
            state: State after the previous tick.

        Returns:
            The new state and the camera pose to render it with.
        """
        sample = self.evaluator.sample(state.u)
        speed = speed_at(sample.position[1], self.work, self.settings.gravity)
        world_up = self._banked_up(sample, state.world_up)

        new_state = replace(
            state,
            u=advance_parameter(state.u, self.settings.parameter_step,
                                self.evaluator.lower, self.evaluator.upper),
            world_up=world_up,
            orbit_angle=state.orbit_angle + self.settings.orbit_step,
            speed=speed,
        )
        logger.debug(f"Tick u={state.u:.2f} -> {new_state.u:.2f}, speed {speed:.2f} m/s, "
                     f"up {np.round(world_up, 3)}", extra=TICK_EXTRA)
        pose = self.camera_pose(new_state, sample)
        return new_state, pose
