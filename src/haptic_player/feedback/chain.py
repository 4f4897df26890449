"""
EffectChain - fluent scheduler for timed feedback effects.

A chain keeps a virtual clock. Effect calls schedule a trigger at the
current virtual time; then(after) moves the clock forward. Nothing blocks:
every call computes a time point, hands a closure to the dispatcher and
returns the chain.

Example:
    chain = EffectChain(backend, clock, dispatcher)
    chain.selection_changed().then(milliseconds(200)).selection_changed().play()
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable

from .backend import EffectBackend
from .timing import Clock, Dispatcher
from .types import EffectKind, ImpactStyle, NotificationType


def _check_duration(value: Any, name: str) -> timedelta:
    if not isinstance(value, timedelta):
        raise TypeError(f"{name} must be a timedelta, got {type(value).__name__}")
    if value < timedelta(0):
        raise ValueError(f"{name} must not be negative: {value}")
    return value


def _check_times(times: Any) -> int:
    if isinstance(times, bool) or not isinstance(times, int):
        raise TypeError(f"times must be an int, got {type(times).__name__}")
    if times < 0:
        raise ValueError(f"times must not be negative: {times}")
    return times


class EffectChain:
    """
    A sequence of feedback effects sharing one virtual clock.

    State:
        accumulated_time: Time point the next effect is scheduled at
        last_effect: Most recent effect call (EffectKind.NONE initially)
        last_interval: Most recent then() delay (zero initially)

    The chain is single-owner: build it on one thread, in one go.
    """

    def __init__(
        self,
        backend: EffectBackend,
        clock: Clock,
        dispatcher: Dispatcher,
        after: timedelta | None = None,
    ):
        """
        Args:
            backend: Executes effects when their time comes
            clock: Source of "now" and time arithmetic
            dispatcher: Runs triggers at their time points
            after: Optional initial delay before the first effect
        """
        self.backend = backend
        self.clock = clock
        self.dispatcher = dispatcher

        self._accumulated_time = clock.now()
        self._last_effect = EffectKind.NONE
        self._last_interval = timedelta(0)

        if after is not None:
            self._advance(_check_duration(after, "after"))

    @property
    def accumulated_time(self) -> Any:
        return self._accumulated_time

    @property
    def last_effect(self) -> EffectKind:
        return self._last_effect

    @property
    def last_interval(self) -> timedelta:
        return self._last_interval

    # =========================================================================
    # EFFECTS
    # =========================================================================

    def selection_changed(self) -> EffectChain:
        """Schedule a selection tick at the current time."""
        self._last_effect = EffectKind.SELECTION_CHANGED
        self.backend.prepare_selection()
        self._schedule(self.backend.selection_changed)
        return self

    def impact_occurred(self, style: ImpactStyle) -> EffectChain:
        """Schedule an impact of the given style at the current time."""
        effect = EffectKind.for_impact(style)
        self._last_effect = effect
        self.backend.prepare_impact(style)
        self._schedule(lambda: self.backend.impact_occurred(style))
        return self

    def notification_occurred(self, notification_type: NotificationType) -> EffectChain:
        """Schedule a notification of the given type at the current time."""
        effect = EffectKind.for_notification(notification_type)
        self._last_effect = effect
        self.backend.prepare_notification()
        self._schedule(lambda: self.backend.notification_occurred(notification_type))
        return self

    # =========================================================================
    # TIME
    # =========================================================================

    def then(self, after: timedelta | None = None) -> EffectChain:
        """
        Move the chain's clock forward.

        then(after) advances by `after` and remembers it as the last
        interval. then() with no delay is a connective and changes nothing.
        """
        if after is None:
            return self

        after = _check_duration(after, "after")
        self._advance(after)
        self._last_interval = after
        return self

    def play(self) -> None:
        """
        Finish the chain: reset the virtual clock to now.

        Already scheduled triggers are untouched, as are last_effect and
        last_interval.
        """
        self._accumulated_time = self.clock.now()

    def replay(
        self,
        times: int,
        interval: timedelta | None = None,
    ) -> EffectChain | None:
        """
        Repeat the last effect so it occurs `times` times in total.

        Without an interval this is a terminal call: each of the times - 1
        repeats is scheduled at the current time, then the clock moves by
        last_interval; afterwards the chain is reset with play().

        With an interval the chain stays open: before each repeat the clock
        moves by `interval`, last_interval is left alone and no reset
        happens. Returns the chain.

        replay(0) does nothing in either form.
        """
        times = _check_times(times)
        if interval is not None:
            interval = _check_duration(interval, "interval")
            return self._replay_every(times, interval)

        if times == 0:
            return None

        for _ in range(times - 1):
            self._trigger(self._last_effect)
            self._advance(self._last_interval)

        self.play()
        return None

    def _replay_every(self, times: int, interval: timedelta) -> EffectChain:
        if times == 0:
            return self

        for _ in range(times - 1):
            self._advance(interval)
            self._trigger(self._last_effect)

        return self

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _advance(self, duration: timedelta) -> None:
        self._accumulated_time = self.clock.add(self._accumulated_time, duration)

    def _schedule(self, action: Callable[[], None]) -> None:
        self.dispatcher.schedule_at(self._accumulated_time, action)

    def _trigger(self, effect: EffectKind) -> None:
        """Re-issue the effect call matching `effect` (NONE does nothing)."""
        if effect is EffectKind.NONE:
            return
        if effect is EffectKind.SELECTION_CHANGED:
            self.selection_changed()
        elif effect.impact_style is not None:
            self.impact_occurred(effect.impact_style)
        elif effect.notification_type is not None:
            self.notification_occurred(effect.notification_type)

    def __repr__(self) -> str:
        return (
            f"EffectChain(accumulated_time={self._accumulated_time!r}, "
            f"last_effect={self._last_effect.value}, "
            f"last_interval={self._last_interval!r})"
        )
