"""
Uniform cubic B-spline evaluation over a `ControlPointSet`.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING

import numpy as np

from rollercoaster.model.control_points import ControlPointSet, STENCIL_SIZE

if TYPE_CHECKING:
    import numpy.typing as npt

POSITION = 0
VELOCITY = 1
ACCELERATION = 2


class ParameterDomainError(ValueError):
    """Raised when a path parameter lies outside ``[3, N)``."""


@dataclass(frozen=True)
class CurveSample:
    """Position and its first two derivatives, all taken at the same `u`."""
    u: float
    position: npt.NDArray[np.float64]
    velocity: npt.NDArray[np.float64]
    acceleration: npt.NDArray[np.float64]


def basis_weights(
    t: float | npt.NDArray[np.float64],
    order: int,
) -> npt.NDArray[np.float64]:
    """
    Uniform cubic B-spline basis (or its derivative) at local parameter `t`.

    Args:
        t: Local parameter(s) in [0, 1).
        order: 0 for position, 1 for the first derivative, 2 for the second.

    Raises:
        ValueError: If `order` is not 0, 1 or 2.

    Returns:
        Weights ``(r3, r2, r1, r0)`` for the stencil ``CP[i-3] .. CP[i]``;
        shape (4,) for scalar `t`, (K, 4) for an array of K values.
    """
    t = np.asarray(t, dtype=np.float64)
    s = 1.0 - t
    if order == POSITION:
        weights = (
            s ** 3 / 6.0,
            (3.0 * t ** 3 - 6.0 * t ** 2 + 4.0) / 6.0,
            (-3.0 * t ** 3 + 3.0 * t ** 2 + 3.0 * t + 1.0) / 6.0,
            t ** 3 / 6.0,
        )
    elif order == VELOCITY:
        weights = (
            -0.5 * s ** 2,
            1.5 * t ** 2 - 2.0 * t,
            -1.5 * t ** 2 + t + 0.5,
            0.5 * t ** 2,
        )
    elif order == ACCELERATION:
        weights = (
            s,
            3.0 * t - 2.0,
            -3.0 * t + 1.0,
            t,
        )
    else:
        raise ValueError(f"Unsupported derivative order: {order}. "
                         f"'order' must be 0, 1, or 2.")
    return np.stack(np.broadcast_arrays(*weights), axis=-1)


class CurveEvaluator:
    """
    Evaluates the closed B-spline through a set of control points.

    A parameter ``u`` selects segment ``i = floor(u)``, whose shape is set by
    the four points ``CP[i-3] .. CP[i]``. Valid parameters therefore lie in
    ``[3, N)`` for N control points.
    """
    def __init__(self, control_points: ControlPointSet) -> None:
        self.control_points = control_points
        self.lower, self.upper = control_points.parameter_domain

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(domain=[{self.lower}, {self.upper}))"

    def _check_domain(self, u: float) -> None:
        if not (self.lower <= u < self.upper):
            raise ParameterDomainError(
                f"Path parameter {u} is outside [{self.lower}, {self.upper})."
            )

    def evaluate(self, u: float, order: int = POSITION) -> npt.NDArray[np.float64]:
        """
        Position, velocity or acceleration of the curve at `u`.

        Args:
            u: Path parameter in ``[3, N)``.
            order: 0 (position), 1 (velocity) or 2 (acceleration).

        Raises:
            ParameterDomainError: If `u` is outside the valid domain.
            ValueError: If `order` is not 0, 1 or 2.

        Returns:
            A (3,) array.
        """
        self._check_domain(u)
        i = math.floor(u)
        weights = basis_weights(u - i, order)
        stencil = self.control_points.points[i - (STENCIL_SIZE - 1):i + 1]
        return weights @ stencil

    def sample(self, u: float) -> CurveSample:
        """Evaluate position, velocity and acceleration together at `u`."""
        return CurveSample(
            u=float(u),
            position=self.evaluate(u, POSITION),
            velocity=self.evaluate(u, VELOCITY),
            acceleration=self.evaluate(u, ACCELERATION),
        )

    def evaluate_many(
        self,
        us: npt.NDArray[np.float64],
        order: int = POSITION,
    ) -> npt.NDArray[np.float64]:
        """
        Vectorised `evaluate` over an array of K parameters.

        Returns:
            A (K, 3) array.
        """
        us = np.asarray(us, dtype=np.float64).reshape(-1)
        if us.size == 0:
            return np.empty((0, 3), dtype=np.float64)
        # NaN fails both comparisons, so it lands in the mask too
        outside = ~((us >= self.lower) & (us < self.upper))
        if outside.any():
            self._check_domain(float(us[outside][0]))

        segments = np.floor(us).astype(np.int64)
        weights = basis_weights(us - segments, order)  # (K, 4)

        offsets = np.arange(-(STENCIL_SIZE - 1), 1, dtype=np.int64)
        stencils = self.control_points.points[segments[:, None] + offsets]  # (K, 4, 3)
        return np.einsum("kj,kjc->kc", weights, stencils)

    def parameter_range(self, step: float) -> npt.NDArray[np.float64]:
        """Parameters ``lower, lower + step, ...`` strictly below the upper bound."""
        n = math.ceil((self.upper - self.lower) / step)
        us = self.lower + step * np.arange(n, dtype=np.float64)
        return us[us < self.upper]
