"""Configuration dataclasses."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from ..feedback.types import EffectKind, milliseconds

BACKENDS = ("mock", "midi")


@dataclass
class MidiConfig:
    """MIDI output backend configuration."""
    port_name: Optional[str] = None  # Port name or None for default output
    virtual: bool = False
    channel: int = 0
    notes: dict[EffectKind, int] = field(default_factory=dict)  # Overrides


@dataclass
class PlayerConfig:
    """Main application configuration."""
    backend: str = "mock"
    midi: MidiConfig = field(default_factory=MidiConfig)
    initial_delay_ms: float = 0.0
    presets_file: Optional[str] = None
    verbose: bool = True

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{self.backend}'. Expected one of {BACKENDS}")
        if self.initial_delay_ms < 0:
            raise ValueError(f"initial_delay_ms must not be negative: {self.initial_delay_ms}")

    @property
    def initial_delay(self) -> Optional[timedelta]:
        """Initial chain delay, or None when there is none."""
        if not self.initial_delay_ms:
            return None
        return milliseconds(self.initial_delay_ms)

    @classmethod
    def with_defaults(cls) -> "PlayerConfig":
        """Create config with sensible defaults."""
        return cls(
            backend="mock",
            midi=MidiConfig(port_name="Haptic Player", virtual=True),
        )
