from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from rollercoaster.model.curve import CurveEvaluator, POSITION

if TYPE_CHECKING:
    import numpy.typing as npt

GRAVITY = 9.81  # m/s^2


def work_constant(max_height: float, gravity: float = GRAVITY, margin: float = 3.0) -> float:
    """
    Total energy per unit mass available to the train.

    Args:
        max_height: Highest point of the track in meters.
        gravity: Gravitational acceleration.
        margin: Extra energy so the train still moves at the crest.

    Returns:
        ``gravity * max_height + margin``.
    """
    return gravity * max_height + margin


def speed_at(
    height: float | npt.NDArray[np.float64],
    work: float,
    gravity: float = GRAVITY,
) -> float | npt.NDArray[np.float64]:
    """
    Speed from the energy balance ``v^2 / 2 = work - g * height``.

    The radicand is clamped to zero, so heights above the energy budget give
    a speed of 0.0 instead of NaN.
    """
    radicand = np.maximum(2.0 * (work - gravity * np.asarray(height, dtype=np.float64)), 0.0)
    speed = np.sqrt(radicand)
    if speed.ndim == 0:
        return float(speed)
    return speed


@dataclass
class SpeedProfile:
    """Height and speed tabulated along the whole track."""
    parameters: npt.NDArray[np.float64]
    heights: npt.NDArray[np.float64]
    speeds: npt.NDArray[np.float64]

    @classmethod
    def from_evaluator(
        cls,
        evaluator: CurveEvaluator,
        step: float = 0.01,
        gravity: float = GRAVITY,
        margin: float = 3.0,
    ) -> SpeedProfile:
        us = evaluator.parameter_range(step)
        heights = evaluator.evaluate_many(us, POSITION)[:, 1]
        work = work_constant(evaluator.control_points.max_height, gravity, margin)
        return cls(parameters=us, heights=heights, speeds=speed_at(heights, work, gravity))

    @property
    def slowest_index(self) -> int:
        return int(np.argmin(self.speeds))

    def plot(self) -> None:
        """
        Plot height and speed over the path parameter.
        """
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax_height = plt.subplots(figsize=(7, 5))

        ax_height.plot(self.parameters, self.heights, 'g', lw=2, label="Height")
        ax_height.set_xlabel("Path parameter u")
        ax_height.set_ylabel("Height (m)")
        ax_height.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)

        ax_speed = ax_height.twinx()
        ax_speed.plot(self.parameters, self.speeds, 'r', lw=2, label="Speed")
        ax_speed.set_ylabel("Speed (m/s)")

        plt.title("Speed Profile")
        fig.legend(loc="upper right")
        plt.xlim(math.floor(self.parameters[0]), math.ceil(self.parameters[-1]))
        plt.show()
