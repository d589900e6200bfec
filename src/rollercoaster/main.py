"""
Application Initialization
==========================
This module wires the model, controller and view together and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line and sets up logging.
2. Loads the track layout and builds the curve evaluator.
3. Builds the static track geometry and the ride controller.
4. Creates the Main Window and starts the animation.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rollercoaster import config
from rollercoaster.controller.animation import RideController
from rollercoaster.controller.track_builder import build_track_geometry
from rollercoaster.logging_config import setup_logging
from rollercoaster.model.control_points import ClassicLoopTrack
from rollercoaster.model.curve import CurveEvaluator
from rollercoaster.model.geometry_primitives import Y_AXIS
from rollercoaster.model.physics import SpeedProfile
from rollercoaster.model.tilt import TiltMode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rollercoaster",
        description="Ride an animated roller coaster. Keys: C toggles the camera, Q quits.",
    )
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: INFO).")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    parser.add_argument("--log-ticks", action="store_true",
                        help="With DEBUG, also log every animation tick.")
    parser.add_argument("--tilt", default=TiltMode.LEGACY.value,
                        choices=[mode.value for mode in TiltMode],
                        help="Banking of the ride camera: 'legacy' keeps the rider upright, "
                             "'full' compounds the whole rotation (default: legacy).")
    parser.add_argument("--plot-speed", action="store_true",
                        help="Plot height and speed along the track instead of riding.")
    return parser


def settings_from_args(args: argparse.Namespace) -> config.RideSettings:
    return config.RideSettings(tilt_mode=TiltMode(args.tilt))


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file,
                  log_ticks=args.log_ticks)

    # 2. Track and curve
    evaluator = CurveEvaluator(ClassicLoopTrack().control_points())
    settings = settings_from_args(args)

    if args.plot_speed:
        SpeedProfile.from_evaluator(
            evaluator, gravity=settings.gravity, margin=settings.work_margin
        ).plot()
        return

    # 3. Static geometry and the controller
    # Rails are framed with the upright reference. Banking only ever scales it
    # in legacy mode, which leaves every frame unchanged, so one build is enough.
    geometry = build_track_geometry(evaluator, Y_AXIS)
    controller = RideController(evaluator, settings)

    # Qt is only needed for the interactive ride
    from rollercoaster.app.application import create_app
    from rollercoaster.view.main_window import MainWindow

    # 4. Create the Qt Application and the Main Window
    app = create_app()
    window = MainWindow(controller, geometry)
    window.show()
    window.start()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
