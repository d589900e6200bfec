"""
Configuration & Constants
=========================
This module serves as the central registry for the ride's global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (tick rate, step sizes, colors)
   from being scattered throughout the model, controller and view.
2. Settings: It bundles the values the animation controller needs into a
   single `RideSettings` object that the CLI can adjust.

Exports:
    RideSettings: Settings consumed by the animation controller.
    RGB: Type alias for a flat (r, g, b) color in [0, 1].
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from rollercoaster.model.tilt import TiltMode

RGB = Tuple[float, float, float]

# --- Window ---
WINDOW_TITLE: str = "Roller Coaster"
WINDOW_SIZE: Tuple[int, int] = (500, 500)
VIEW_ANGLE_DEG: float = 60.0
CLIPPING_RANGE: Tuple[float, float] = (0.5, 1000.0)

# --- Animation ---
TICK_INTERVAL_MS: int = 33  # ~30 frames per second
PARAMETER_STEP: float = 0.05  # advance of the path parameter per tick
GEOMETRY_STEP: float = 0.01  # parameter spacing of rail vertices

# --- Physics ---
GRAVITY: float = 9.81  # m/s^2
WORK_MARGIN: float = 3.0  # extra energy so the train clears the peak

# --- Cameras ---
CAMERA_LIFT: float = 3.0  # rider eye height above the rail
ORBIT_RADIUS: float = 100.0
ORBIT_HEIGHT: float = 20.0
ORBIT_STEP: float = 0.01  # radians per tick

# --- Rails ---
SHIFT_RIGHT: float = 2.0  # SHR
SHIFT_UP: float = 2.0  # SHU
MAIN_RAIL_COLOR: RGB = (0.0, 0.6, 1.0)
OFFSET_RAIL_COLOR: RGB = (1.0, 0.0, 0.8)
COLUMN_COLOR: RGB = (0.0, 0.0, 0.0)
COLUMN_BASE_Y: float = -5.0

# --- Scenery ---
GROUND_COLOR: RGB = (0.2, 0.7, 0.33)
SKY_COLOR: RGB = (0.3, 0.4, 0.55)
SKY_CEILING_COLOR: RGB = (0.3, 0.4, 0.7)
SCENE_HALF_EXTENT: float = 100.0
SKY_RADIUS: float = 100.0
SKY_HEIGHT: float = 200.0
SKY_BASE_Y: float = -1.5
BACKGROUND_COLOR: RGB = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class RideSettings:
    """Values the animation controller reads on every tick."""
    parameter_step: float = PARAMETER_STEP
    gravity: float = GRAVITY
    work_margin: float = WORK_MARGIN
    camera_lift: float = CAMERA_LIFT
    orbit_radius: float = ORBIT_RADIUS
    orbit_height: float = ORBIT_HEIGHT
    orbit_step: float = ORBIT_STEP
    tilt_mode: TiltMode = TiltMode.LEGACY
