from typing import Any, Callable, Protocol
from tb.common.logger import log
from tb.core.config import ConfigError, TimerConfig, resolve
from tb.core.timer_state import EngineSnapshot, Phase, TimerState
from tb.util.misc import format_duration, now_seconds

# Sampling cadence while running.
POLL_MS = 250

# Shown in place of the remaining time once a run completes.
DONE_TEXT = "Done"


# Anything that can run a callback repeatedly and cancel it again. The app uses a QTimer-backed one.
class Scheduler(Protocol):
    def schedule(self, callback: Callable[[], None], interval_ms: int) -> Any: ...
    def cancel(self, handle: Any) -> None: ...


class Renderer:
    """Receives engine output. Every hook is a no-op here, so subclasses only
    override what they actually draw."""

    def remaining_changed(self, text: str) -> None:
        pass

    def progress_changed(self, completed: int, total: int) -> None:
        pass

    def active_dot_changed(self, index: int | None) -> None:
        pass

    def phase_changed(self, snapshot: EngineSnapshot) -> None:
        pass


class TimerEngine:
    """
    Countdown engine for one dot grid. Elapsed time is always derived from
    clock() - start_epoch, never accumulated per tick, so poll jitter or a
    stalled event loop can't make it drift.
    """

    def __init__(self, scheduler: Scheduler, clock: Callable[[], int] = now_seconds, poll_ms: int = POLL_MS):
        self._scheduler = scheduler
        self._clock = clock
        self._poll_ms = poll_ms
        self._config: TimerConfig | None = None
        self._state = TimerState()
        self._renderers: list[Renderer] = []

    #region === Properties ===

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def config(self) -> TimerConfig | None:
        return self._config

    @property
    def state(self) -> TimerState:
        return self._state

    # Number of live poll handles, which is only ever 0 or 1.
    @property
    def handle_count(self) -> int:
        return 0 if self._state.poll_handle is None else 1

    @property
    def elapsed(self) -> int:
        phase = self._state.phase
        if phase == Phase.RUNNING:
            return max(0, self._clock() - self._state.start_epoch)
        if phase == Phase.PAUSED:
            return self._state.paused_elapsed_seconds
        if phase == Phase.COMPLETED and self._config is not None:
            return self._config.total_seconds
        return 0

    @property
    def remaining(self) -> int:
        if self._config is None:
            return 0
        return max(0, self._config.total_seconds - self.elapsed)

    def snapshot(self) -> EngineSnapshot:
        elapsed = self.elapsed
        dot_count = self._config.dot_count if self._config else 0
        phase = self._state.phase
        if phase == Phase.COMPLETED:
            completed = dot_count
        elif phase == Phase.IDLE or self._config is None:
            completed = 0
        else:
            completed = self._completed_for(elapsed)
        active = None
        if phase in (Phase.RUNNING, Phase.PAUSED) and dot_count > 0:
            active = min(dot_count - 1, completed)
        return EngineSnapshot(
            phase=phase,
            elapsed=elapsed,
            remaining=self.remaining,
            completed_count=completed,
            active_index=active,
            dot_count=dot_count,
        )

    #endregion === Properties ===

    #region === Subscribers ===

    def subscribe(self, renderer: Renderer) -> None:
        if renderer not in self._renderers:
            self._renderers.append(renderer)

    def unsubscribe(self, renderer: Renderer) -> None:
        if renderer in self._renderers:
            self._renderers.remove(renderer)

    def _emit_remaining(self, text):
        for r in list(self._renderers):
            r.remaining_changed(text)

    def _emit_progress(self, completed, total):
        for r in list(self._renderers):
            r.progress_changed(completed, total)

    def _emit_active(self, index):
        for r in list(self._renderers):
            r.active_dot_changed(index)

    def _emit_phase(self):
        snap = self.snapshot()
        for r in list(self._renderers):
            r.phase_changed(snap)

    #endregion === Subscribers ===

    #region === Commands ===

    # Validates a total/interval pair without touching the engine. Failures come back as the ConfigError itself.
    def configure(self, total_seconds, interval_seconds) -> TimerConfig | ConfigError:
        try:
            return resolve(total_seconds, interval_seconds)
        except ConfigError as e:
            log.debug(f"Rejected configuration total={total_seconds} interval={interval_seconds}: {e.kind.value}")
            return e

    def start(self, config: TimerConfig | None = None) -> None:
        if self._state.phase == Phase.RUNNING:
            log.debug("Ignoring start, engine is already running")
            return
        if config is not None:
            self._config = config
        if self._config is None:
            raise RuntimeError("TimerEngine.start() called before any configuration was given.")

        self._cancel_poll()
        self._state.clear()
        self._state.phase = Phase.RUNNING
        self._state.start_epoch = self._clock()
        log.debug(f"Started run of {self._config.total_seconds}s in {self._config.dot_count} dots "
                  f"at epoch {self._state.start_epoch}")
        self._install_poll()
        self._emit_phase()
        self.tick()

    def pause(self) -> None:
        if self._state.phase != Phase.RUNNING:
            return
        self._cancel_poll()
        elapsed = max(0, self._clock() - self._state.start_epoch)
        self._state.paused_elapsed_seconds = min(self._config.total_seconds, elapsed)
        self._state.phase = Phase.PAUSED
        log.debug(f"Paused at {self._state.paused_elapsed_seconds}s elapsed")
        self._emit_phase()

    def resume(self) -> None:
        # Never started, nothing to resume
        if self._state.start_epoch is None:
            log.debug("Ignoring resume, engine was never started")
            return
        if self._state.phase != Phase.PAUSED:
            return
        self._state.start_epoch = self._clock() - self._state.paused_elapsed_seconds
        self._state.phase = Phase.RUNNING
        log.debug(f"Resumed at {self._state.paused_elapsed_seconds}s elapsed")
        self._install_poll()
        self._emit_phase()
        self.tick()

    def pause_or_resume(self) -> None:
        if self._state.phase == Phase.RUNNING:
            self.pause()
        else:
            self.resume()

    # Back to Idle from any phase. The config is kept so the grid keeps its size until the next start.
    def reset(self) -> None:
        self._cancel_poll()
        self._state.clear()
        if self._config is not None:
            self._emit_remaining(format_duration(self._config.total_seconds))
            self._emit_progress(0, self._config.dot_count)
            self._emit_active(None)
        log.debug("Reset engine to idle")
        self._emit_phase()

    #endregion === Commands ===

    #region === Polling ===

    def _completed_for(self, elapsed):
        completed = elapsed // self._config.interval_seconds
        return max(0, min(self._config.dot_count, completed))

    # One clock sample. Stale ticks from a cancelled poll land here too, and are dropped by the phase check.
    def tick(self) -> None:
        if self._state.phase != Phase.RUNNING:
            return
        cfg = self._config
        elapsed = max(0, self._clock() - self._state.start_epoch)
        remaining = max(0, cfg.total_seconds - elapsed)
        self._emit_remaining(format_duration(remaining))

        completed = self._completed_for(elapsed)
        if completed != self._state.last_completed_count:
            self._emit_progress(completed, cfg.dot_count)
            self._state.last_completed_count = completed

        self._emit_active(min(cfg.dot_count - 1, completed))

        if remaining <= 0:
            self._complete()

    def _complete(self):
        self._cancel_poll()
        self._state.phase = Phase.COMPLETED
        self._state.last_completed_count = self._config.dot_count
        self._emit_progress(self._config.dot_count, self._config.dot_count)
        self._emit_active(None)
        self._emit_remaining(DONE_TEXT)
        log.debug("Run completed")
        self._emit_phase()

    # Any earlier handle is cancelled first, so repeated installs never stack up timers.
    def _install_poll(self):
        self._cancel_poll()
        self._state.poll_handle = self._scheduler.schedule(self.tick, self._poll_ms)

    def _cancel_poll(self):
        if self._state.poll_handle is not None:
            self._scheduler.cancel(self._state.poll_handle)
            self._state.poll_handle = None

    #endregion === Polling ===
