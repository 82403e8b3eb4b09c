#!/usr/bin/env python3
"""
Step playback.

A Sequencer replays a precomputed list of steps one at a time with a delay
between emissions. The delay comes from `Sequencer.speed_ms`, which is read
again every time the next emission is scheduled, so a speed change applies
to the very next pending step and never to steps already emitted.

`speed_ms` is shared state between the caller and any in-flight playback
(including the worker thread used by `start`). It is a single attribute
assignment, which is atomic in CPython, so no lock guards it.

Three ways to consume a Playback:
- iterate it (blocks between steps; cancel-aware wait),
- call `poll()` from a frame loop (never blocks),
- `Sequencer.start()` (a daemon thread iterates it and calls back).

At most one playback per Sequencer is active: `play()` cancels the previous
one before handing out a new handle.
"""

import threading
import time
from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")

DEFAULT_SPEED_MS = 40


class Playback(Generic[T]):
    """Cancellation handle and lazy step stream for one playback."""

    def __init__(self, steps: Iterable[T], delay_s: Callable[[], float],
                 clock: Callable[[], float] = time.monotonic):
        self._steps: List[T] = list(steps)
        self._delay_s = delay_s
        self._clock = clock
        self._index = 0
        self._cancel = threading.Event()
        self._deadline: Optional[float] = None
        self._thread: Optional[threading.Thread] = None

    # -------------------- state --------------------

    @property
    def emitted(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._steps) - self._index

    @property
    def done(self) -> bool:
        """True once every step has been emitted."""
        return self._index >= len(self._steps)

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def active(self) -> bool:
        return not self.done and not self.cancelled

    def cancel(self) -> None:
        """Stop further emissions. Already emitted steps stay emitted."""
        self._cancel.set()

    # -------------------- blocking stream --------------------

    def __iter__(self) -> Iterator[T]:
        while self._index < len(self._steps):
            # wait() returns True as soon as cancel() is called
            if self._cancel.wait(self._delay_s()):
                return
            step = self._steps[self._index]
            if self._cancel.is_set():
                return
            self._index += 1
            yield step

    # -------------------- frame-loop stream --------------------

    def poll(self, now: Optional[float] = None) -> List[T]:
        """Emit every step whose deadline has passed; never blocks.

        The first deadline is scheduled on the first poll. Each following
        deadline is the previous one plus the speed read at that moment, so
        a slow frame catches up in order instead of dropping steps.
        """
        if now is None:
            now = self._clock()
        out: List[T] = []
        while self.active:
            if self._deadline is None:
                self._deadline = now + self._delay_s()
            if now < self._deadline:
                break
            out.append(self._steps[self._index])
            self._index += 1
            self._deadline += self._delay_s()
        return out

    # -------------------- worker thread --------------------

    def _drive(self, on_step: Callable[[T], None],
               on_complete: Optional[Callable[[], None]]) -> None:
        # re-checked after the yield: a cancel racing the emission stops
        # the step before its callback. One arriving inside on_step cannot be recalled.
        for step in self:
            if self.cancelled:
                return
            on_step(step)
        if self.done and not self.cancelled and on_complete is not None:
            on_complete()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else ("done" if self.done else "active")
        return f"<Playback {self._index}/{len(self._steps)} {state}>"


class Sequencer:
    def __init__(self, speed_ms: float = DEFAULT_SPEED_MS,
                 clock: Callable[[], float] = time.monotonic):
        self.speed_ms = speed_ms
        self._clock = clock
        self._current: Optional[Playback] = None
        self._swap_lock = threading.Lock()

    @property
    def current(self) -> Optional[Playback]:
        return self._current

    def set_speed(self, ms: float) -> None:
        self.speed_ms = ms

    def _delay_s(self) -> float:
        return max(0.0, self.speed_ms) / 1000.0

    def play(self, steps: Iterable[T]) -> Playback[T]:
        """Cancel any running playback and return a new one over `steps`."""
        playback: Playback[T] = Playback(steps, self._delay_s, self._clock)
        with self._swap_lock:
            previous, self._current = self._current, playback
        if previous is not None:
            previous.cancel()
        return playback

    def start(self, steps: Iterable[T], on_step: Callable[[T], None],
              on_complete: Optional[Callable[[], None]] = None) -> Playback[T]:
        """Like play(), but a daemon thread drives the playback and calls back."""
        playback = self.play(steps)
        thread = threading.Thread(target=playback._drive, args=(on_step, on_complete), daemon=True)
        playback._thread = thread
        thread.start()
        return playback

    def cancel(self) -> None:
        with self._swap_lock:
            current, self._current = self._current, None
        if current is not None:
            current.cancel()
