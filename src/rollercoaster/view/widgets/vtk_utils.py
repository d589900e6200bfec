"""
VTK and Geometry Utilities
Helper functions converting track geometry into PyVista data sets.
"""
import numpy as np
import numpy.typing as npt
import pyvista as pv

import logging

from rollercoaster import config
from rollercoaster.controller.track_builder import Quad, Strip

logger = logging.getLogger(__name__)


class VtkUtils:
    @staticmethod
    def quad_to_polydata(quad: Quad) -> pv.PolyData:
        """Convert a single quadrilateral to PolyData."""
        pts = np.asarray(quad.corners, dtype=np.float64).reshape(4, 3)
        return pv.PolyData(pts, faces=np.array([4, 0, 1, 2, 3], dtype=np.int_))

    @staticmethod
    def merge_strips(strips: list[Strip]) -> pv.PolyData:
        """Merge several strips of the same color into one data set (one actor)."""
        points: list[npt.NDArray[np.float64]] = []
        cells: list[npt.NDArray[np.int_]] = []
        offset = 0
        for strip in strips:
            pts = np.asarray(strip.vertices, dtype=np.float64).reshape(-1, 3)
            n = pts.shape[0]
            if n < 3:
                logger.warning(f"Strip '{strip.name}' has only {n} vertices, skipped.")
                continue
            points.append(pts)
            cells.append(np.hstack([[n], np.arange(offset, offset + n, dtype=np.int_)]))
            offset += n

        if not points:
            return pv.PolyData()
        return pv.PolyData(np.vstack(points), strips=np.concatenate(cells).astype(np.int_))

    @staticmethod
    def sky_cylinder() -> pv.PolyData:
        """Open cylinder around the scene, standing on its base at SKY_BASE_Y."""
        return pv.Cylinder(
            center=(0.0, config.SKY_BASE_Y + config.SKY_HEIGHT / 2.0, 0.0),
            direction=(0.0, 1.0, 0.0),
            radius=config.SKY_RADIUS,
            height=config.SKY_HEIGHT,
            resolution=200,
            capping=False,
        )
