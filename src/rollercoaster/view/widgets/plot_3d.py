"""
3D Visualization Widget (PyVista Wrapper)
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional

import logging

from PySide6.QtWidgets import QWidget, QVBoxLayout

from pyvistaqt import QtInteractor
import pyvista as pv

from rollercoaster import config
from rollercoaster.controller.track_builder import Strip, TrackGeometry
from rollercoaster.model.state import CameraPose
from rollercoaster.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)


class PyVistaWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()
        self._vtk_utils = VtkUtils()

        # --- Actors state ---
        self._scenery_actors: list[pv.Actor] = []
        self._track_actors: list[pv.Actor] = []

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def show_track(self, geometry: TrackGeometry) -> None:
        """
        Replaces the static scene:
        1. Scenery (ground, sky, ceiling)
        2. Rails, one actor per color
        3. Support columns
        """
        logger.info("Updating 3D scene.")
        self._clear_actors()

        # --- 1. LAYER: SCENERY ---
        self._scenery_actors.append(self.plotter.add_mesh(
            self._vtk_utils.sky_cylinder(),
            color=config.SKY_COLOR,
            lighting=False,
            pickable=False,
        ))
        for quad in geometry.scenery:
            self._scenery_actors.append(self.plotter.add_mesh(
                self._vtk_utils.quad_to_polydata(quad),
                color=quad.color,
                lighting=False,
                pickable=False,
            ))

        # --- 2. LAYER: RAILS + COLUMNS ---
        for color, strips in self._group_by_color(geometry.rails + geometry.columns).items():
            merged = self._vtk_utils.merge_strips(strips)
            if merged.n_points == 0:
                continue
            self._track_actors.append(self.plotter.add_mesh(
                merged,
                color=color,
                lighting=False,
                show_scalar_bar=False,
                pickable=False,
            ))

        self.plotter.render()

    def set_camera(self, pose: CameraPose) -> None:
        """Apply the camera pose and redraw."""
        self.plotter.camera_position = pose.as_tuple()
        self.plotter.camera.clipping_range = config.CLIPPING_RANGE
        self.plotter.render()

    def close_plotter(self) -> None:
        self.plotter.close()

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(config.BACKGROUND_COLOR)
        self.plotter.camera.view_angle = config.VIEW_ANGLE_DEG
        # The camera is driven by the animation, not by the mouse
        self.plotter.disable()

    @staticmethod
    def _group_by_color(strips: list[Strip]) -> dict[config.RGB, list[Strip]]:
        groups: dict[config.RGB, list[Strip]] = defaultdict(list)
        for strip in strips:
            groups[strip.color].append(strip)
        return dict(groups)

    def _clear_actors(self) -> None:
        for actor in self._scenery_actors + self._track_actors:
            self.plotter.remove_actor(actor)
        self._scenery_actors.clear()
        self._track_actors.clear()
