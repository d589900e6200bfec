"""
Track Geometry Builder
======================
Samples the curve engine along the whole path and turns positions and frames
into renderer-agnostic geometry: rail quad strips, support columns and the
scenery quads.

Why is this file needed?
------------------------
1. Decoupling: The view only receives vertex arrays and colors; it never
   calls the curve, frame or tilt code itself.
2. One routine: Every rail side is produced by `emit_rail_strip`, driven by a
   `RailSpec`, instead of one hand-written loop per strip.

Classes:
    PathFrames: Positions and frame vectors sampled along the path.
    RailSpec: Offset, cross-section and color of one rail.
    Strip: One quad strip with a flat color.
    Quad: One flat quadrilateral with a flat color.
    TrackGeometry: Everything the renderer draws for the track.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence, TYPE_CHECKING

import numpy as np

from rollercoaster import config
from rollercoaster.model.curve import CurveEvaluator, POSITION, VELOCITY
from rollercoaster.model.frame import DegenerateFrameError, Frame, build_frame

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Cross-section corners as (vertical sign, lateral sign); side i of a rail
# joins corner i to corner i + 1.
SECTION_CORNERS: tuple[tuple[int, int], ...] = ((1, -1), (-1, -1), (-1, 1), (1, 1))
RAIL_SIDES = len(SECTION_CORNERS)


@dataclass(frozen=True)
class PathFrames:
    """Curve positions and frame vectors at K parameters, one row per sample."""
    parameters: npt.NDArray[np.float64]
    positions: npt.NDArray[np.float64]
    tangent_normals: npt.NDArray[np.float64]
    laterals: npt.NDArray[np.float64]
    verticals: npt.NDArray[np.float64]

    def __len__(self) -> int:
        return int(self.parameters.shape[0])


@dataclass(frozen=True)
class RailSpec:
    """
    One rail of the track.

    The rail centre is shifted from the curve by
    ``vertical_offset * vertical/2 + lateral_sign * lateral_offset * lateral/2``
    and its square cross-section spans ``section_scale`` times the main rail's.
    """
    name: str
    lateral_sign: int
    vertical_offset: float
    color: config.RGB
    lateral_offset: float = config.SHIFT_RIGHT
    section_scale: float = 1.0


@dataclass(frozen=True)
class Strip:
    """
    Quad strip: vertices come in pairs, consecutive pairs span one quad.
    """
    name: str
    vertices: npt.NDArray[np.float64]
    color: config.RGB

    @property
    def n_quads(self) -> int:
        return max(0, self.vertices.shape[0] // 2 - 1)


@dataclass(frozen=True)
class Quad:
    name: str
    corners: npt.NDArray[np.float64]
    color: config.RGB


@dataclass
class TrackGeometry:
    rails: list[Strip] = field(default_factory=list)
    columns: list[Strip] = field(default_factory=list)
    scenery: list[Quad] = field(default_factory=list)


MAIN_RAIL = RailSpec(name="main", lateral_sign=0, vertical_offset=0.0,
                     color=config.MAIN_RAIL_COLOR)
RIGHT_RAIL = RailSpec(name="upper right", lateral_sign=1, vertical_offset=config.SHIFT_UP,
                      color=config.OFFSET_RAIL_COLOR, section_scale=0.5)
LEFT_RAIL = RailSpec(name="upper left", lateral_sign=-1, vertical_offset=config.SHIFT_UP,
                     color=config.OFFSET_RAIL_COLOR, section_scale=0.5)
DEFAULT_RAILS: tuple[RailSpec, ...] = (MAIN_RAIL, RIGHT_RAIL, LEFT_RAIL)


def sample_path(
    evaluator: CurveEvaluator,
    world_up: npt.NDArray[np.float64],
    step: float = config.GEOMETRY_STEP,
) -> PathFrames:
    """
    Evaluate positions and frames for ``u = 3, 3 + step, ...`` up to the end of the track.

    A sample whose frame is degenerate reuses the previous sample's frame.

    Raises:
        DegenerateFrameError: If the very first sample is degenerate.
    """
    us = evaluator.parameter_range(step)
    positions = evaluator.evaluate_many(us, POSITION)
    velocities = evaluator.evaluate_many(us, VELOCITY)

    frames: list[Frame] = []
    for u, velocity in zip(us, velocities):
        try:
            frames.append(build_frame(velocity, world_up))
        except DegenerateFrameError:
            if not frames:
                raise
            logger.debug(f"Degenerate frame at u={u:.3f}, holding previous frame.")
            frames.append(frames[-1])

    return PathFrames(
        parameters=us,
        positions=positions,
        tangent_normals=np.array([f.tangent_normal for f in frames]).reshape(-1, 3),
        laterals=np.array([f.lateral for f in frames]).reshape(-1, 3),
        verticals=np.array([f.vertical for f in frames]).reshape(-1, 3),
    )


def emit_rail_strip(path: PathFrames, side: int, rail: RailSpec) -> Strip:
    """
    Build one side of one rail as a quad strip.

    Args:
        path: Sampled positions and frames.
        side: Side index in ``range(RAIL_SIDES)``.
        rail: Offset, cross-section and color of the rail.

    Raises:
        ValueError: If `side` is out of range.

    Returns:
        A strip with two vertices per path sample.
    """
    if not 0 <= side < RAIL_SIDES:
        raise ValueError(f"Rail side must be in [0, {RAIL_SIDES}), got {side}.")

    half_vertical = path.verticals / 2.0
    half_lateral = path.laterals / 2.0

    centre = (path.positions
              + rail.vertical_offset * half_vertical
              + rail.lateral_sign * rail.lateral_offset * half_lateral)
    section_vertical = half_vertical * rail.section_scale
    section_lateral = half_lateral * rail.section_scale

    (a_v, a_l), (b_v, b_l) = SECTION_CORNERS[side], SECTION_CORNERS[(side + 1) % RAIL_SIDES]

    vertices = np.empty((2 * len(path), 3), dtype=np.float64)
    vertices[0::2] = centre + a_v * section_vertical + a_l * section_lateral
    vertices[1::2] = centre + b_v * section_vertical + b_l * section_lateral

    return Strip(name=f"{rail.name} rail, side {side + 1}", vertices=vertices, color=rail.color)


def build_rails(path: PathFrames, rails: Sequence[RailSpec] = DEFAULT_RAILS) -> list[Strip]:
    """All sides of all rails, side by side in the order the classic ride drew them."""
    return [emit_rail_strip(path, side, rail) for side in range(RAIL_SIDES) for rail in rails]


def build_support_columns(
    evaluator: CurveEvaluator,
    world_up: npt.NDArray[np.float64],
    base_y: float = config.COLUMN_BASE_Y,
) -> list[Strip]:
    """
    One closed four-sided column under every control-point parameter.

    The column footprint is spanned by the tangent and lateral vectors scaled
    to a quarter; it runs from the rail straight down to `base_y`.
    """
    columns: list[Strip] = []
    lower, upper = evaluator.lower, evaluator.upper
    for u in range(int(lower), int(np.ceil(upper))):
        if not lower <= u < upper:
            continue
        position = evaluator.evaluate(u, POSITION)
        try:
            frame = build_frame(evaluator.evaluate(u, VELOCITY), world_up)
        except DegenerateFrameError:
            logger.warning(f"Skipping support column at u={u}: degenerate frame.")
            continue

        n = frame.tangent_normal / 4.0
        w = frame.lateral / 4.0
        footprint = [-n + w, n + w, n - w, -n - w]
        footprint.append(footprint[0])

        base = np.array([position[0], base_y, position[2]])
        vertices = np.empty((2 * len(footprint), 3), dtype=np.float64)
        vertices[0::2] = [position + c for c in footprint]
        vertices[1::2] = [base + c for c in footprint]
        columns.append(Strip(name=f"column {u}", vertices=vertices, color=config.COLUMN_COLOR))
    return columns


def build_scenery(half_extent: float = config.SCENE_HALF_EXTENT) -> list[Quad]:
    """Ground plane at y = 0 and the sky ceiling closing the scene from above."""
    def horizontal_quad(y: float) -> npt.NDArray[np.float64]:
        return np.array([
            [half_extent, y, -half_extent],
            [half_extent, y, half_extent],
            [-half_extent, y, half_extent],
            [-half_extent, y, -half_extent],
        ])

    return [
        Quad(name="ground", corners=horizontal_quad(0.0), color=config.GROUND_COLOR),
        Quad(name="sky ceiling", corners=horizontal_quad(half_extent), color=config.SKY_CEILING_COLOR),
    ]


def build_track_geometry(
    evaluator: CurveEvaluator,
    world_up: npt.NDArray[np.float64],
    step: float = config.GEOMETRY_STEP,
    rails: Sequence[RailSpec] = DEFAULT_RAILS,
) -> TrackGeometry:
    """Sample the path once and build every static piece of the scene."""
    path = sample_path(evaluator, world_up, step)
    geometry = TrackGeometry(
        rails=build_rails(path, rails),
        columns=build_support_columns(evaluator, world_up),
        scenery=build_scenery(),
    )
    logger.info(f"Built track geometry: {len(path)} samples, {len(geometry.rails)} rail strips, "
                f"{len(geometry.columns)} support columns.")
    return geometry
