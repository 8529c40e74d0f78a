"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all frames), then computes the metrics
the analytics panel and comparison mode need.

Usage:
    rec = Recorder()
    rec.start("dijkstra", graph=g, start=0, end=5)
    rec.run_to_completion()          # runs the tracer, loads the stepper
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Every count comes from frame `event` values; descriptions are never
parsed.

Comparison Mode:
    Two Recorders run on the SAME input, then compare(rec1, rec2) →
    ComparisonResult.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import algorithms
from algorithms.frames import (
    COMPARISON_EVENTS,
    MUTATION_EVENTS,
    Frame,
    FrameEvent,
    GraphFrame,
    SearchFrame,
    TreeFrame,
)
from graph import Graph
from trees import keys_in_order
from engine.errors import UnknownAlgorithmError
from engine.stepper import Stepper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str             = ""
    algo_label:    str             = ""
    category:      str             = ""
    total_frames:  int             = 0
    comparisons:   int             = 0     # COMPARE / EXAMINE / RELAX frames
    mutations:     int             = 0     # SWAP / PLACE / INSERT / ROTATE / RECOLOR
    visits:        int             = 0
    updates:       int             = 0     # Dijkstra distance updates
    wall_time_ms:  float           = 0.0   # wall-clock time to produce the trace
    memory_bytes:  int             = 0     # approx, sys.getsizeof over the frame buffer
    found_index:   Optional[int]   = None  # searches
    path:          List[int]       = field(default_factory=list)   # graphs
    path_cost:     Optional[float] = None
    tree_size:     int             = 0     # trees

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_frames:      str = ""   # which algo needed fewer frames
    winner_comparisons: str = ""
    winner_time:        str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        frames   : Full list of frames from the run.
        metrics  : Computed RunMetrics (available after run_to_completion).
        stepper  : Playback cursor over `frames`.
    """

    def __init__(self):
        self.frames:  List[Frame]          = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Stepper              = Stepper()

        self._algo_info: Optional["algorithms.AlgoInfo"] = None
        self._inputs:    Dict[str, Any]                 = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, **inputs: Any) -> None:
        """Select the algorithm and its inputs for this run."""
        info = algorithms.get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._inputs    = {k: v for k, v in inputs.items() if k in info.inputs}
        self.frames     = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Run the tracer, keep every frame, compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started = time.perf_counter()
        self.frames = algorithms.trace(self._algo_info.key, **self._inputs)
        wall_ms = (time.perf_counter() - started) * 1000

        self.stepper.load(self.frames)
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "ran %s: %d frames in %.2f ms",
            self._algo_info.key, len(self.frames), self.metrics.wall_time_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional["algorithms.AlgoInfo"]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        inputs: Dict[str, Any] = {}
        for name, value in self._inputs.items():
            inputs[name] = value.to_dict() if isinstance(value, Graph) else value
        return {
            "algoKey": self._algo_info.key if self._algo_info else "",
            "inputs":  inputs,
            "metrics": self.metrics.to_dict() if self.metrics else {},
            "frames":  [f.to_dict() for f in self.frames],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.frames[-1] if self.frames else None

        events = [f.event for f in self.frames]

        # approximate memory: sizeof the frame buffer
        mem = sys.getsizeof(self.frames)
        for f in self.frames:
            mem += sys.getsizeof(f)

        metrics = RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            category=info.category if info else "",
            total_frames=len(self.frames),
            comparisons=sum(1 for e in events if e in COMPARISON_EVENTS),
            mutations=sum(1 for e in events if e in MUTATION_EVENTS),
            visits=events.count(FrameEvent.VISIT),
            updates=events.count(FrameEvent.UPDATE),
            wall_time_ms=round(wall_ms, 3),
            memory_bytes=mem,
        )

        if isinstance(last, SearchFrame):
            metrics.found_index = last.found_index
        elif isinstance(last, GraphFrame):
            metrics.path = list(last.path)
            # only a start→end route has a cost; traversal orders do not
            if info is not None and info.key == "dijkstra" and len(last.path) > 0:
                metrics.path_cost = last.graph.path_weight(list(last.path))
        elif isinstance(last, TreeFrame):
            metrics.tree_size = len(keys_in_order(last.tree))

        return metrics


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_frames=winner(l.total_frames, r.total_frames, l.algo_label, r.algo_label),
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_time=winner(l.wall_time_ms, r.wall_time_ms, l.algo_label, r.algo_label),
    )
