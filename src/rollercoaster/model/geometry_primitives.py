"""
Geometric Primitives for the curve engine.

Points and directions are plain ``(3,)`` float64 numpy arrays; the helpers
below are the few vector operations the frame and tilt code share.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.spatial.transform import Rotation

if TYPE_CHECKING:
    import numpy.typing as npt

# Nominal world up, also the reference the banking starts from
Y_AXIS = np.array([0.0, 1.0, 0.0])
ORIGIN = np.zeros(3)
Y_AXIS.flags.writeable = False
ORIGIN.flags.writeable = False


def magnitude(v: npt.NDArray[np.float64]) -> float:
    return float(np.linalg.norm(v))


def rotate_about_axis(
    v: npt.NDArray[np.float64],
    axis: npt.NDArray[np.float64],
    angle: float,
) -> npt.NDArray[np.float64]:
    """
    Rotate `v` by `angle` radians about the unit vector `axis` (right-hand rule).

    The rotation vector ``angle * axis`` is exactly Rodrigues' parametrisation,
    so this is ``v cos a + (axis x v) sin a + axis (axis . v)(1 - cos a)``.
    """
    return Rotation.from_rotvec(angle * np.asarray(axis, dtype=np.float64)).apply(v)
