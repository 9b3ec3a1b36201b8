"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Player is the ONLY object a renderer interacts with during playback.
It holds one complete Trace and a cursor into it, and exposes a clean
play/pause/next/prev/jump/speed API.

State machine:
    IDLE     (step 0, not playing)
    PLAYING  (timer armed, advances one step per `speed_ms`)
    PAUSED   (step > 0, not playing)

    IDLE / PAUSED  →  play()   →  PLAYING      (no-op at the final step)
    PLAYING        →  pause()  →  PAUSED / IDLE
    PLAYING        →  reaches final step  →  PAUSED
    any            →  next / prev / jump_to  →  not playing, cursor moved
    any            →  reset() / load()        →  IDLE

Timers:
  At most ONE timer is armed per Player.  Arming cancels the previous
  one, and pause / reset / load / navigation cancel synchronously.  Each
  armed timer carries a generation number; a callback whose generation
  is stale (the timer was cancelled after it had already started firing)
  does nothing.

  The scheduler is pluggable:
    ThreadingScheduler  real wall-clock timers (threading.Timer, or the
                        running asyncio loop when there is one)
    ManualScheduler     timers fire only when the host / test says so
    None                no timers; the host calls tick() itself
"""

import asyncio
import logging
import threading
from enum import Enum
from typing import Callable, Dict, List, Optional

from algorithms.step import Snapshot
from algorithms.trace import Trace

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlayerState(Enum):
    IDLE    = "idle"
    PLAYING = "playing"
    PAUSED  = "paused"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   250,    # default
    "turbo":  50,
}

DEFAULT_SPEED_MS = SPEED_PRESETS["fast"]
MIN_SPEED_MS     = 10
SLOWEST_LEVEL_MS = 2000
FASTEST_LEVEL_MS = 50


def speed_for_level(level: int) -> int:
    """Map a 1 (slowest) … 10 (fastest) slider position to milliseconds."""
    if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 10:
        raise ValueError(f"speed level must be between 1 and 10, got {level}")
    span = SLOWEST_LEVEL_MS - FASTEST_LEVEL_MS
    return round(SLOWEST_LEVEL_MS - span * (level - 1) / 9)


# ---------------------------------------------------------------------------
# Schedulers
# ---------------------------------------------------------------------------
class ThreadingScheduler:
    """Wall-clock timers.  Uses the running asyncio loop if called inside one."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]):
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            return loop.call_later(delay_ms / 1000, callback)
        timer = threading.Timer(delay_ms / 1000, callback)
        timer.daemon = True
        timer.start()
        return timer


class _ManualHandle:
    def __init__(self, delay_ms: int, callback: Callable[[], None]):
        self.delay_ms  = delay_ms
        self.callback  = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler: nothing fires until fire_next() is called.

        sched  = ManualScheduler()
        player = Player(trace, scheduler=sched)
        player.play()
        sched.fire_next()        # exactly one tick
    """

    def __init__(self):
        self._pending: List[_ManualHandle] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(delay_ms, callback)
        self._pending.append(handle)
        return handle

    @property
    def armed(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for h in self._pending if not h.cancelled)

    def fire_next(self) -> bool:
        """Fire the oldest live timer.  False if none is armed."""
        while self._pending:
            handle = self._pending.pop(0)
            if not handle.cancelled:
                handle.callback()
                return True
        return False

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Keep firing until no timer is armed.  Returns how many fired."""
        fired = 0
        while fired < limit and self.fire_next():
            fired += 1
        return fired


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
class Player:
    """
    Attributes (read-only properties):
        step        : Index of the displayed snapshot, always in [0, N-1].
        state       : Current PlayerState.
        is_playing  : state is PLAYING.
        total_steps : N, the trace length.
        progress    : (step + 1) / N × 100, derived on every read.
        current     : The displayed Snapshot.
        speed_ms    : Milliseconds between auto-advance ticks.

    on_change(player) fires after every change of step, playing flag,
    speed or trace.  The renderer hooks its re-draw here.
    """

    def __init__(
        self,
        trace: Trace,
        speed_ms: int = DEFAULT_SPEED_MS,
        scheduler=None,
        on_change: Optional[Callable[["Player"], None]] = None,
    ):
        self._lock       = threading.RLock()
        self._trace      = trace
        self._step       = 0
        self._playing    = False
        self._speed_ms   = _check_speed(speed_ms)
        self._scheduler  = scheduler
        self._timer      = None
        self._generation = 0
        self.on_change   = on_change

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> Trace:
        return self._trace

    @property
    def step(self) -> int:
        return self._step

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def state(self) -> PlayerState:
        if self._playing:
            return PlayerState.PLAYING
        return PlayerState.IDLE if self._step == 0 else PlayerState.PAUSED

    @property
    def total_steps(self) -> int:
        return len(self._trace)

    @property
    def progress(self) -> float:
        return (self._step + 1) / len(self._trace) * 100

    @property
    def current(self) -> Snapshot:
        return self._trace[self._step]

    @property
    def current_line(self) -> str:
        return self._trace.code_line_text(self._step)

    @property
    def speed_ms(self) -> int:
        return self._speed_ms

    @property
    def at_end(self) -> bool:
        return self._step == len(self._trace) - 1

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> bool:
        """Start auto-advance.  No-op (returns False) at the final step."""
        with self._lock:
            if self._playing or self.at_end:
                return False
            self._playing = True
            self._arm()
        log.debug("play from step %d", self._step)
        self._notify()
        return True

    def pause(self) -> bool:
        with self._lock:
            if not self._playing:
                return False
            self._stop()
        log.debug("paused at step %d", self._step)
        self._notify()
        return True

    def toggle_play(self) -> bool:
        """Flip between playing and not playing.  Returns the new is_playing."""
        if self._playing:
            self.pause()
        else:
            self.play()
        return self._playing

    # ------------------------------------------------------------------
    # Navigation (always pauses first)
    # ------------------------------------------------------------------
    def next(self) -> bool:
        return self._move_to(self._step + 1)

    def prev(self) -> bool:
        return self._move_to(self._step - 1)

    def jump_to(self, index: int) -> bool:
        """Seek to index if 0 <= index < N; anything else is ignored."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return self._move_to(index)

    def reset(self) -> None:
        with self._lock:
            self._stop()
            self._step = 0
        log.debug("reset")
        self._notify()

    def load(self, trace: Trace) -> None:
        """Swap in a new trace.  A different trace always resets playback."""
        with self._lock:
            if trace is self._trace:
                return
            self._stop()
            self._trace = trace
            self._step  = 0
        log.debug("loaded %s trace (%d steps)", trace.algorithm, len(trace))
        self._notify()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed_ms: int) -> None:
        with self._lock:
            self._speed_ms = _check_speed(speed_ms)
            if self._playing:
                self._arm()
        self._notify()

    def set_speed_preset(self, name: str) -> None:
        if name not in SPEED_PRESETS:
            raise ValueError(f"unknown speed preset {name!r}; choose from {sorted(SPEED_PRESETS)}")
        self.set_speed(SPEED_PRESETS[name])

    # ------------------------------------------------------------------
    # Tick  (timer body; hosts without a scheduler call it directly)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """Advance one step if playing.  Returns True if a step was taken."""
        with self._lock:
            if not self._playing:
                return False
            self._advance()
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _move_to(self, index: int) -> bool:
        with self._lock:
            was_playing = self._playing
            self._stop()
            moved = 0 <= index < len(self._trace) and index != self._step
            if moved:
                self._step = index
        if moved or was_playing:
            self._notify()
        return moved

    def _arm(self) -> None:
        self._cancel_timer()
        if self._scheduler is None:
            return
        generation = self._generation

        def fire():
            with self._lock:
                if generation != self._generation or not self._playing:
                    return
                self._timer = None
                self._advance()
            self._notify()

        self._timer = self._scheduler.call_later(self._speed_ms, fire)

    def _advance(self) -> None:
        self._step += 1
        if self.at_end:
            self._stop()
        else:
            self._arm()

    def _stop(self) -> None:
        self._playing = False
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)


def _check_speed(speed_ms: int) -> int:
    if isinstance(speed_ms, bool) or not isinstance(speed_ms, (int, float)):
        raise ValueError(f"speed must be a number of milliseconds, got {speed_ms!r}")
    if speed_ms < MIN_SPEED_MS:
        raise ValueError(f"speed must be at least {MIN_SPEED_MS} ms, got {speed_ms}")
    return int(speed_ms)
