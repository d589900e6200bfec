from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from rollercoaster.model.geometry_primitives import magnitude

if TYPE_CHECKING:
    import numpy.typing as npt

# Below this length a velocity or cross product has no usable direction
DEGENERATE_TOLERANCE = 1e-9


class DegenerateFrameError(ArithmeticError):
    """Raised when the frame is undefined (zero velocity or up parallel to the tangent)."""


@dataclass(frozen=True)
class Frame:
    """
    Orthonormal triad attached to one curve sample.

    Attributes:
        tangent_normal: Unit vector pointing against the direction of travel.
        lateral: Unit vector to the side, ``up x tangent_normal``.
        vertical: Unit vector completing the triad, ``tangent_normal x lateral``.
    """
    tangent_normal: npt.NDArray[np.float64]
    lateral: npt.NDArray[np.float64]
    vertical: npt.NDArray[np.float64]


def build_frame(
    velocity: npt.NDArray[np.float64],
    world_up: npt.NDArray[np.float64],
) -> Frame:
    """
    Build the moving frame from the curve velocity and the banking reference.

    Args:
        velocity: First derivative of the curve at the sample.
        world_up: Current world-up reference.

    Raises:
        DegenerateFrameError: If `velocity` is (nearly) zero or `world_up` is
            parallel to it.

    Returns:
        The frame for this sample.
    """
    speed = magnitude(velocity)
    if speed <= DEGENERATE_TOLERANCE:
        raise DegenerateFrameError(f"Velocity {velocity} has no direction.")
    tangent_normal = -np.asarray(velocity, dtype=np.float64) / speed

    lateral = np.cross(world_up, tangent_normal)
    lateral_mag = magnitude(lateral)
    if lateral_mag <= DEGENERATE_TOLERANCE:
        raise DegenerateFrameError(
            f"World up {world_up} is parallel to the tangent {tangent_normal}."
        )
    lateral = lateral / lateral_mag

    vertical = np.cross(tangent_normal, lateral)
    return Frame(tangent_normal=tangent_normal, lateral=lateral, vertical=vertical)
