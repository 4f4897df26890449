"""Preset chains: named, reusable effect sequences."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from ..feedback.types import ImpactStyle, NotificationType, milliseconds, seconds

if TYPE_CHECKING:
    from ..feedback.chain import EffectChain

STEP_ACTIONS = ("selection", "impact", "notification", "then", "replay", "play")


@dataclass(frozen=True)
class Step:
    """
    One chain call inside a preset.

    Attributes:
        action: One of STEP_ACTIONS
        style: Impact style (impact steps)
        notification_type: Notification type (notification steps)
        duration: Delay for then steps, interval for replay steps (None =
            terminal replay on the chain's own last interval)
        times: Total occurrences for replay steps
    """
    action: str
    style: ImpactStyle | None = None
    notification_type: NotificationType | None = None
    duration: timedelta | None = None
    times: int = 0

    def __post_init__(self):
        if self.action not in STEP_ACTIONS:
            raise ValueError(f"Unknown step '{self.action}'. Expected one of {STEP_ACTIONS}")
        if self.action == "impact" and self.style is None:
            raise ValueError("Impact step needs a style")
        if self.action == "notification" and self.notification_type is None:
            raise ValueError("Notification step needs a type")
        if self.action == "then" and self.duration is None:
            raise ValueError("Then step needs a delay")
        if self.action == "replay" and self.times < 0:
            raise ValueError(f"Replay times must not be negative: {self.times}")

    @classmethod
    def selection(cls) -> Step:
        return cls("selection")

    @classmethod
    def impact(cls, style: ImpactStyle) -> Step:
        return cls("impact", style=style)

    @classmethod
    def notification(cls, notification_type: NotificationType) -> Step:
        return cls("notification", notification_type=notification_type)

    @classmethod
    def then(cls, after: timedelta) -> Step:
        return cls("then", duration=after)

    @classmethod
    def replay(cls, times: int, interval: timedelta | None = None) -> Step:
        return cls("replay", times=times, duration=interval)

    @classmethod
    def play(cls) -> Step:
        return cls("play")

    @property
    def is_terminal(self) -> bool:
        """True for steps that end a chain (play, replay without interval)."""
        return self.action == "play" or (self.action == "replay" and self.duration is None)

    def apply(self, chain: "EffectChain") -> None:
        """Make the chain call this step stands for."""
        if self.action == "selection":
            chain.selection_changed()
        elif self.action == "impact":
            chain.impact_occurred(self.style)
        elif self.action == "notification":
            chain.notification_occurred(self.notification_type)
        elif self.action == "then":
            chain.then(self.duration)
        elif self.action == "replay":
            chain.replay(self.times, self.duration)
        else:
            chain.play()

    def describe(self) -> str:
        """Short human-readable form, e.g. 'then 200ms'."""
        if self.action == "impact":
            return f"impact {self.style.value}"
        if self.action == "notification":
            return f"notification {self.notification_type.value}"
        if self.action == "then":
            return f"then {_format_duration(self.duration)}"
        if self.action == "replay":
            if self.duration is None:
                return f"replay x{self.times}"
            return f"replay x{self.times} every {_format_duration(self.duration)}"
        return self.action


def _format_duration(duration: timedelta) -> str:
    ms = duration / timedelta(milliseconds=1)
    return f"{ms:g}ms"


@dataclass
class Preset:
    """A named sequence of steps that can be applied to any chain."""
    name: str
    steps: list[Step] = field(default_factory=list)
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Preset needs a name")
        for step in self.steps[:-1]:
            if step.is_terminal:
                raise ValueError(
                    f"Preset '{self.name}': '{step.describe()}' ends the chain "
                    "and must be the last step"
                )

    def apply(self, chain: "EffectChain") -> None:
        """
        Run every step on the chain.

        Presets that don't end on a terminal step are closed with play().
        """
        for step in self.steps:
            step.apply(chain)

        if not self.steps or not self.steps[-1].is_terminal:
            chain.play()

    def describe(self) -> str:
        return " -> ".join(step.describe() for step in self.steps)


# Pre-defined presets
def get_builtin_presets() -> dict[str, Preset]:
    """The three demo sequences: ticks, a replayed tick, and a mixed chain."""
    presets = [
        Preset(
            name="triple_tick",
            description="Three selection ticks 200ms apart",
            steps=[
                Step.selection(), Step.then(milliseconds(200)),
                Step.selection(), Step.then(milliseconds(200)),
                Step.selection(), Step.then(milliseconds(200)),
                Step.play(),
            ],
        ),
        Preset(
            name="tick_replay",
            description="One selection tick replayed to three on a 200ms cadence",
            steps=[
                Step.selection(), Step.then(milliseconds(200)),
                Step.replay(3),
            ],
        ),
        Preset(
            name="tick_impact_success",
            description="Double tick, light impact, then a success notification",
            steps=[
                Step.selection(), Step.replay(2, milliseconds(300)),
                Step.then(milliseconds(150)),
                Step.impact(ImpactStyle.LIGHT), Step.then(seconds(1)),
                Step.notification(NotificationType.SUCCESS),
                Step.play(),
            ],
        ),
    ]
    return {preset.name: preset for preset in presets}
