from dataclasses import dataclass
from enum import Enum
from typing import Any


class Phase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


# Mutable run state for a single engine. start_epoch is shifted back by any earlier elapsed time, so elapsed is
# always just now - start_epoch while running.
@dataclass
class TimerState:
    phase: Phase = Phase.IDLE
    start_epoch: int | None = None
    paused_elapsed_seconds: int = 0
    last_completed_count: int = -1  # -1 means nothing emitted yet
    poll_handle: Any = None

    # Back to a fresh Idle state. The poll handle must already have been cancelled by the caller.
    def clear(self):
        self.phase = Phase.IDLE
        self.start_epoch = None
        self.paused_elapsed_seconds = 0
        self.last_completed_count = -1
        self.poll_handle = None


# Read-only view of an engine, handed to renderers on phase changes.
@dataclass(frozen=True)
class EngineSnapshot:
    phase: Phase
    elapsed: int
    remaining: int
    completed_count: int
    active_index: int | None
    dot_count: int
