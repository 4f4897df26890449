"""Feedback backends: the things that actually buzz, click or tap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import mido

from .types import EffectKind, ImpactStyle, NotificationType


class EffectBackend(Protocol):
    """
    Executes feedback effects immediately when called.

    The prepare_* hints are optional warm-up calls with no observable
    effect on correctness. Triggers are synchronous and return nothing.
    """

    def prepare_selection(self) -> None: ...

    def prepare_impact(self, style: ImpactStyle) -> None: ...

    def prepare_notification(self) -> None: ...

    def selection_changed(self) -> None: ...

    def impact_occurred(self, style: ImpactStyle) -> None: ...

    def notification_occurred(self, notification_type: NotificationType) -> None: ...


# =============================================================================
# MOCK BACKEND
# =============================================================================

@dataclass
class TriggerRecord:
    """One effect the mock backend executed."""
    effect: EffectKind
    at: Any = None  # Clock time point, if the backend was given a clock


class MockBackend:
    """Mock backend for running chains without feedback hardware."""

    def __init__(self, clock: Any = None, verbose: bool = False):
        self.clock = clock
        self.verbose = verbose
        self.triggers: list[TriggerRecord] = []
        self.prepared: dict[str, int] = {"selection": 0, "impact": 0, "notification": 0}

    def prepare_selection(self) -> None:
        self.prepared["selection"] += 1

    def prepare_impact(self, style: ImpactStyle) -> None:
        self.prepared["impact"] += 1

    def prepare_notification(self) -> None:
        self.prepared["notification"] += 1

    def selection_changed(self) -> None:
        self._record(EffectKind.SELECTION_CHANGED)

    def impact_occurred(self, style: ImpactStyle) -> None:
        self._record(EffectKind.for_impact(style))

    def notification_occurred(self, notification_type: NotificationType) -> None:
        self._record(EffectKind.for_notification(notification_type))

    @property
    def effects(self) -> list[EffectKind]:
        """Executed effects in order."""
        return [record.effect for record in self.triggers]

    def clear(self) -> None:
        self.triggers.clear()
        for key in self.prepared:
            self.prepared[key] = 0

    def _record(self, effect: EffectKind) -> None:
        at = self.clock.now() if self.clock is not None else None
        self.triggers.append(TriggerRecord(effect=effect, at=at))
        if self.verbose:
            print(f"[HAPTIC] {effect.value}")


# =============================================================================
# MIDI BACKEND
# =============================================================================

DEFAULT_NOTES: dict[EffectKind, int] = {
    EffectKind.SELECTION_CHANGED: 60,
    EffectKind.LIGHT_IMPACT: 62,
    EffectKind.MEDIUM_IMPACT: 62,
    EffectKind.HEAVY_IMPACT: 62,
    EffectKind.NOTIFICATION_SUCCESS: 64,
    EffectKind.NOTIFICATION_ERROR: 65,
    EffectKind.NOTIFICATION_WARNING: 67,
}

IMPACT_VELOCITY: dict[ImpactStyle, int] = {
    ImpactStyle.LIGHT: 40,
    ImpactStyle.MEDIUM: 80,
    ImpactStyle.HEAVY: 127,
}

DEFAULT_VELOCITY = 100


class MidiBackend:
    """
    Drive an external feedback device (actuator controller, drum pad,
    light desk) through a MIDI output port.

    Each effect is a note_on/note_off pair. Impact styles share a note and
    differ in velocity; selection and each notification type get their
    own note. The port opens lazily on the first prepare or trigger.
    """

    def __init__(
        self,
        port_name: str | None = None,
        virtual: bool = False,
        channel: int = 0,
        notes: dict[EffectKind, int] | None = None,
        port: Any = None,
    ):
        """
        Args:
            port_name: Output port to open (None = mido's default output)
            virtual: Create a virtual port instead of opening an existing one
            channel: MIDI channel (0-15)
            notes: Per-effect note overrides, merged over DEFAULT_NOTES
            port: Already-open output port (skips opening)
        """
        if not 0 <= channel <= 15:
            raise ValueError(f"MIDI channel must be 0-15, got {channel}")

        self.port_name = port_name
        self.virtual = virtual
        self.channel = channel
        self.notes = {**DEFAULT_NOTES, **(notes or {})}
        self._port = port

    def prepare_selection(self) -> None:
        self._ensure_port()

    def prepare_impact(self, style: ImpactStyle) -> None:
        self._ensure_port()

    def prepare_notification(self) -> None:
        self._ensure_port()

    def selection_changed(self) -> None:
        self._send(EffectKind.SELECTION_CHANGED, DEFAULT_VELOCITY)

    def impact_occurred(self, style: ImpactStyle) -> None:
        self._send(EffectKind.for_impact(style), IMPACT_VELOCITY[style])

    def notification_occurred(self, notification_type: NotificationType) -> None:
        self._send(EffectKind.for_notification(notification_type), DEFAULT_VELOCITY)

    def close(self) -> None:
        """Close the output port if this backend opened one."""
        if self._port is not None:
            self._port.close()
            self._port = None

    def _ensure_port(self) -> Any:
        if self._port is None:
            self._port = mido.open_output(self.port_name, virtual=self.virtual)
            print(f"[MIDI] Opened output: {self._port.name}")
        return self._port

    def _send(self, effect: EffectKind, velocity: int) -> None:
        port = self._ensure_port()
        note = self.notes[effect]
        port.send(mido.Message("note_on", channel=self.channel, note=note, velocity=velocity))
        port.send(mido.Message("note_off", channel=self.channel, note=note, velocity=0))
