"""
engine/
-------
Playback, recording, catalog and boundary-validation layer.

    from engine import Stepper, Recorder, compare, Catalog

`engine.errors` is imported first: the algorithm registry imports it
while `engine` itself may still be initialising.
"""

from engine.errors   import (
    VisualizerError,
    InvalidInputError,
    UnknownAlgorithmError,
    DuplicateAlgorithmError,
)
from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare
from engine.catalog  import AlgorithmConfig, Catalog

__all__ = [
    "VisualizerError",
    "InvalidInputError",
    "UnknownAlgorithmError",
    "DuplicateAlgorithmError",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "AlgorithmConfig",
    "Catalog",
]
