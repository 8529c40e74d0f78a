"""
stepper.py — Step-by-Step Playback Cursor
==========================================
The Stepper is what the playback layer drives during a session.  It
holds a finished list of frames (a trace is always computed up front)
and an index into it, and exposes play/pause/next/prev/speed.

State machine:
    IDLE    →  load()   →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (last frame reached) → FINISHED
    any     →  reset()  →  IDLE

Thread safety:
  This class is NOT thread-safe.  The HTTP layer keeps one Stepper per
  session and guards it with its own lock.
"""

import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms.frames import Frame


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per frame)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        frames      : The finished trace.
        current_idx : Index into `frames` that is currently displayed.
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Frame) fired every time the current
                      frame changes.
    """

    def __init__(self, on_step: Optional[Callable[[Frame], None]] = None):
        self.frames:      List[Frame]  = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.speed:       float        = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Frame], None]] = on_step

        # for auto-play timing
        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, frames: Sequence[Frame]) -> None:
        """Attach a finished trace and show its first frame."""
        self.frames      = list(frames)
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        if self.frames:
            self._goto(0)
        if len(self.frames) <= 1:
            self.state = StepperState.FINISHED

    def reset(self) -> None:
        """Back to IDLE — caller must call load() again."""
        self.frames      = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one frame.  Returns False if already at the end."""
        target = self.current_idx + 1
        if target >= len(self.frames):
            self.state = StepperState.FINISHED
            return False
        self._goto(target)
        if target == len(self.frames) - 1:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one frame.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary frame index."""
        if not 0 <= idx < len(self.frames):
            return False
        self._goto(idx)
        if idx == len(self.frames) - 1:
            self.state = StepperState.FINISHED
        elif self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to frame 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        if self.frames:
            self._goto(len(self.frames) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one frame.  Returns True if a frame
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.02, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_frame(self) -> Optional[Frame]:
        if 0 <= self.current_idx < len(self.frames):
            return self.frames[self.current_idx]
        return None

    @property
    def total_frames(self) -> int:
        return len(self.frames)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step is not None:
            self.on_step(self.frames[idx])
