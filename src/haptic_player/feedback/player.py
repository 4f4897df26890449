"""HapticPlayer - wires a backend, clock and dispatcher together for chains."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from .backend import EffectBackend
from .chain import EffectChain
from .timing import Clock, Dispatcher, MonotonicClock, ThreadDispatcher

if TYPE_CHECKING:
    from ..presets import Preset


class HapticPlayer:
    """
    Factory for effect chains sharing one backend, clock and dispatcher.

    Replaces process-wide feedback singletons: every chain built by a
    player talks to the collaborators the player was given.

    Usage:
        player = HapticPlayer(MockBackend(verbose=True))
        player.chain().selection_changed().then(milliseconds(200)).replay(3)
        player.wait()
        player.close()
    """

    def __init__(
        self,
        backend: EffectBackend,
        clock: Clock | None = None,
        dispatcher: Dispatcher | None = None,
    ):
        """
        Args:
            backend: Feedback backend shared by all chains
            clock: Clock (default: MonotonicClock)
            dispatcher: Dispatcher (default: a started ThreadDispatcher
                owned by this player; only available with a MonotonicClock)

        Raises:
            ValueError: If a non-monotonic clock is given without a dispatcher
        """
        self.backend = backend
        self.clock = clock or MonotonicClock()
        self._owns_dispatcher = dispatcher is None

        if dispatcher is None:
            if not isinstance(self.clock, MonotonicClock):
                raise ValueError(
                    f"{type(self.clock).__name__} needs an explicit dispatcher "
                    "(e.g. VirtualDispatcher for VirtualClock)"
                )
            dispatcher = ThreadDispatcher(self.clock)
            dispatcher.start()
        self.dispatcher = dispatcher

    def chain(self, after: timedelta | None = None) -> EffectChain:
        """Start a new chain, optionally delayed by `after`."""
        return EffectChain(self.backend, self.clock, self.dispatcher, after=after)

    def play_preset(self, preset: "Preset", after: timedelta | None = None) -> EffectChain:
        """Schedule a preset on a fresh chain and return that chain."""
        chain = self.chain(after=after)
        preset.apply(chain)
        return chain

    def wait(self, timeout: float | None = None) -> bool:
        """
        Wait for scheduled effects to finish (thread dispatchers only).

        Returns:
            True if everything ran, False on timeout
        """
        if isinstance(self.dispatcher, ThreadDispatcher):
            return self.dispatcher.wait_idle(timeout)
        return True

    def close(self) -> None:
        """Stop the dispatcher if this player created it."""
        if self._owns_dispatcher and isinstance(self.dispatcher, ThreadDispatcher):
            self.dispatcher.stop()

    def __enter__(self) -> HapticPlayer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
