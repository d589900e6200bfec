from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Iterable, Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# A cubic B-spline segment needs four neighbouring control points
STENCIL_SIZE = 4


class ControlPointSet:
    """
    Ordered, immutable set of 3-D anchor points defining a closed track.

    The path is closed by repeating the first three points at the end of the
    table, so every segment of the loop has a full four-point stencil.
    """
    def __init__(self, points: Iterable[Sequence[float]]) -> None:
        """
        Args:
            points: Sequence of (x, y, z) control points.

        Raises:
            ValueError: If the points are not (N, 3) with N >= 4.
        """
        arr = np.array(list(points), dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError(f"Expected control points of shape (N, 3), got {arr.shape}.")
        if arr.shape[0] < STENCIL_SIZE:
            raise ValueError(
                f"At least {STENCIL_SIZE} control points are required, got {arr.shape[0]}."
            )
        arr.flags.writeable = False
        self._points = arr

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(count={self.count}, max_height={self.max_height})"

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int) -> npt.NDArray[np.float64]:
        return self._points[index]

    @property
    def points(self) -> npt.NDArray[np.float64]:
        """Read-only (N, 3) view of the control points."""
        return self._points

    @property
    def count(self) -> int:
        return int(self._points.shape[0])

    @property
    def max_height(self) -> float:
        """Highest y-coordinate among the control points."""
        return float(self._points[:, 1].max())

    @property
    def parameter_domain(self) -> tuple[float, float]:
        """Half-open interval ``[lower, upper)`` of valid path parameters."""
        return float(STENCIL_SIZE - 1), float(self.count)


# ==========================================
# ABSTRACT CLASS FOR TRACK LAYOUTS
# ==========================================
class TrackLayout(ABC):
    """
    Abstract provider of a track's control points.

    The curve, frame and tilt code only ever see the resulting
    `ControlPointSet`, so another layout can be swapped in here.
    """
    NAME: str = "Track"

    @abstractmethod
    def control_points(self) -> ControlPointSet:
        """Return the control points of this layout."""
        pass


class ClassicLoopTrack(TrackLayout):
    """
    The built-in ride: a climb to a 37 m crest and a long descent back to the
    station, closed over the seam at points 15..17.
    """
    NAME = "Classic Loop"

    POINTS = (
        (10.0, 10.0, 0.0),
        (8.0, 12.0, -3.0),
        (3.0, 17.0, -8.0),
        (-4.0, 17.0, -6.0),
        (-8.0, 17.0, -5.0),
        (-12.0, 20.0, 0.0),
        (-12.0, 20.0, 5.0),
        (-7.0, 30.0, 5.0),
        (-3.0, 37.0, 5.0),
        (-1.0, 37.0, 5.0),
        (1.0, 32.0, 5.0),
        (3.0, 27.0, 5.0),
        (5.0, 22.0, 5.0),
        (7.0, 17.0, 5.0),
        (9.0, 15.0, 5.0),
        # seam: repeats points 0..2
        (10.0, 10.0, 0.0),
        (8.0, 12.0, -3.0),
        (3.0, 17.0, -8.0),
    )

    def control_points(self) -> ControlPointSet:
        cps = ControlPointSet(self.POINTS)
        logger.info(f"Loaded track layout '{self.NAME}': {cps.count} control points, "
                    f"max height {cps.max_height:.1f} m.")
        return cps
