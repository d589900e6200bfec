"""
Main Application Window
=======================
The window that hosts the 3D view, the animation timer and the key actions.

Why is this file needed?
------------------------
1. Event loop glue: A QTimer calls the animation controller every tick and
   hands the resulting camera pose to the 3D widget.
2. Routing: It connects the two keyboard actions (toggle camera, quit) to
   the controller and the application.
"""
import logging

from PySide6.QtWidgets import QMainWindow, QLabel
from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction, QCloseEvent

from rollercoaster import config
from rollercoaster.controller.animation import RideController
from rollercoaster.controller.track_builder import TrackGeometry
from rollercoaster.model.state import AnimationState
from rollercoaster.view.widgets.plot_3d import PyVistaWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, controller: RideController, geometry: TrackGeometry) -> None:
        super().__init__()
        self.controller: RideController = controller
        self.state: AnimationState = controller.initial_state()

        self.setWindowTitle(config.WINDOW_TITLE)
        self.resize(*config.WINDOW_SIZE)

        # --- CENTRAL 3D VIEW ---
        self.visualizer = PyVistaWidget()
        self.setCentralWidget(self.visualizer)

        # --- STATUS BAR ---
        self.lbl_speed = QLabel("Speed: -")
        self.lbl_camera = QLabel()
        self.statusBar().addWidget(self.lbl_speed)
        self.statusBar().addPermanentWidget(self.lbl_camera)

        # --- ACTIONS ---
        self._create_actions()

        # --- ANIMATION TIMER ---
        self.timer = QTimer(self)
        self.timer.setInterval(config.TICK_INTERVAL_MS)
        self.timer.timeout.connect(self.on_tick)

        # Initial Render
        self.visualizer.show_track(geometry)
        self.visualizer.set_camera(self.controller.camera_pose(self.state))
        self.update_status()

    def _create_actions(self) -> None:
        self.act_toggle_camera = QAction("Toggle Camera", self)
        self.act_toggle_camera.setShortcut("C")
        self.act_toggle_camera.triggered.connect(self.on_toggle_camera)
        self.addAction(self.act_toggle_camera)

        self.act_quit = QAction("Quit", self)
        self.act_quit.setShortcut("Q")
        self.act_quit.triggered.connect(self.close)
        self.addAction(self.act_quit)

    # --- SLOTS ---
    def start(self) -> None:
        """Starts the animation loop."""
        logger.info(f"Starting animation, tick every {config.TICK_INTERVAL_MS} ms.")
        self.timer.start()

    def on_tick(self) -> None:
        self.state, pose = self.controller.tick(self.state)
        self.visualizer.set_camera(pose)
        self.update_status()

    def on_toggle_camera(self) -> None:
        self.state = self.state.toggle_camera()
        logger.info(f"Camera mode: {self.state.camera_mode.label}")
        self.visualizer.set_camera(self.controller.camera_pose(self.state))
        self.update_status()

    def update_status(self) -> None:
        self.lbl_speed.setText(f"Speed: {self.state.speed:.1f} m/s")
        self.lbl_camera.setText(f"Camera: {self.state.camera_mode.label} (C to toggle, Q to quit)")

    def closeEvent(self, event: QCloseEvent) -> None:
        self.timer.stop()
        self.visualizer.close_plotter()
        logger.info("Window closed.")
        super().closeEvent(event)
