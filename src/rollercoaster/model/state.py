"""
Ride State (Data Model)
=======================
This module defines the data the animation carries from one tick to the next.

Why is this file needed?
------------------------
1. State Management: The path parameter, the banked world-up reference, the
   orbit angle and the camera mode live in one immutable object instead of
   process-wide globals.
2. Snapshots: The tick function returns a new `AnimationState`; the view
   swaps the whole object at once, so a render never sees a half-updated
   state.

Classes:
    CameraMode: Orbiting external view or path-following ride view.
    CameraPose: Eye / focal point / up triple handed to the renderer.
    AnimationState: The state owned by the animation loop.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from rollercoaster.model.geometry_primitives import Y_AXIS

if TYPE_CHECKING:
    import numpy.typing as npt


class CameraMode(IntEnum):
    """Camera modes, in the order the toggle key cycles through them."""
    ORBIT = 0
    RIDE = 1

    def next(self) -> CameraMode:
        members = list(CameraMode)
        return members[(members.index(self) + 1) % len(members)]

    @property
    def label(self) -> str:
        return {CameraMode.ORBIT: "Orbit", CameraMode.RIDE: "Ride"}[self]


@dataclass(frozen=True)
class CameraPose:
    eye: npt.NDArray[np.float64]
    focal_point: npt.NDArray[np.float64]
    up: npt.NDArray[np.float64]

    def as_tuple(self) -> list[tuple[float, float, float]]:
        """Pose in the ``[eye, focal_point, up]`` form PyVista expects."""
        return [tuple(float(c) for c in vec) for vec in (self.eye, self.focal_point, self.up)]


@dataclass(frozen=True)
class AnimationState:
    """
    Everything the animation loop carries across ticks.

    Attributes:
        u: Current path parameter of the ride camera.
        world_up: Banking reference used by every frame construction.
        orbit_angle: Angle of the external orbiting camera (radians).
        camera_mode: Active camera.
        speed: Last speed readout (m/s).
    """
    u: float = 3.0
    world_up: npt.NDArray[np.float64] = field(default_factory=lambda: Y_AXIS.copy())
    orbit_angle: float = 0.0
    camera_mode: CameraMode = CameraMode.ORBIT
    speed: float = 0.0

    def toggle_camera(self) -> AnimationState:
        """Return a copy with the next camera mode selected."""
        return replace(self, camera_mode=self.camera_mode.next())
