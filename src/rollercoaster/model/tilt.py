"""
Curvature-driven banking of the world-up reference.
"""
from __future__ import annotations

from enum import Enum
import math
from typing import TYPE_CHECKING

import numpy as np

from rollercoaster.model.geometry_primitives import magnitude, rotate_about_axis

if TYPE_CHECKING:
    import numpy.typing as npt

# At or below this speed the track is treated as straight
MIN_CURVATURE_SPEED = 0.01


class TiltMode(Enum):
    """
    How the banking rotation is folded back into the world-up reference.

    LEGACY keeps the up vector on the y axis, only scaling its length, so the
    rider stays upright for any moderate curvature. FULL carries the whole
    rotated vector; the rotations compound with no restoring term and can roll
    the rider past horizontal within a lap.
    """
    FULL = "full"
    LEGACY = "legacy"


def compute_curvature(
    velocity: npt.NDArray[np.float64],
    acceleration: npt.NDArray[np.float64],
) -> float:
    """
    Signed curvature of the path projected onto the horizontal x-z plane.

    Args:
        velocity: First derivative of the curve.
        acceleration: Second derivative at the same parameter.

    Returns:
        ``(v.z a.x - v.x a.z) / |v|^3``, or exactly 0.0 when ``|v| <= 0.01``.
    """
    speed = magnitude(velocity)
    if speed <= MIN_CURVATURE_SPEED:
        return 0.0
    return float((velocity[2] * acceleration[0] - velocity[0] * acceleration[2]) / speed ** 3)


def legacy_up_y(curvature: float, axis: npt.NDArray[np.float64]) -> float:
    """
    Single-scalar banking of the classic ride.

    This is the y-component of the rotation by ``-curvature`` applied to
    ``(1, 1, 1)`` rather than to the up vector. Reproduced as is for visual
    parity with the classic ride.
    """
    c = math.cos(curvature)
    s = math.sin(curvature)
    nx, ny, nz = axis
    return (((1 - c) * nx * ny - s * nz)
            + ((1 - c) * ny * ny + c)
            + ((1 - c) * ny * nz + s * nx))


def apply_tilt(
    curvature: float,
    tangent_normal: npt.NDArray[np.float64],
    world_up: npt.NDArray[np.float64],
    mode: TiltMode = TiltMode.LEGACY,
) -> npt.NDArray[np.float64]:
    """
    Bank the world-up reference around the direction of travel.

    Args:
        curvature: Rotation angle in radians, as returned by `compute_curvature`.
        tangent_normal: Unit rotation axis.
        world_up: Reference to rotate.
        mode: FULL returns the whole rotated vector; LEGACY keeps only the
            classic single y-component, as ``(0, y, 0)``.

    Returns:
        The world-up reference for the next frame.
    """
    if mode is TiltMode.LEGACY:
        return np.array([0.0, legacy_up_y(curvature, tangent_normal), 0.0])
    return rotate_about_axis(world_up, tangent_normal, curvature)
