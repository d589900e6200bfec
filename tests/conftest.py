from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the src layout is importable when running pytest without installing.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from rollercoaster.model.control_points import ClassicLoopTrack  # noqa: E402
from rollercoaster.model.curve import CurveEvaluator  # noqa: E402


@pytest.fixture
def control_points():
    return ClassicLoopTrack().control_points()


@pytest.fixture
def evaluator(control_points):
    return CurveEvaluator(control_points)
