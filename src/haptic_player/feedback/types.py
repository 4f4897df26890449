"""
Core types for haptic feedback chains.

This module contains the small closed vocabularies the chain works with:
- EffectKind: Which feedback effect a chain last produced
- ImpactStyle: Strength of an impact effect
- NotificationType: Flavour of a notification effect
- Duration helpers: milliseconds(), seconds(), parse_duration()
"""

from __future__ import annotations

import re
from datetime import timedelta
from enum import Enum


class ImpactStyle(Enum):
    """Physical weight of an impact effect."""
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class NotificationType(Enum):
    """Outcome conveyed by a notification effect."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


class EffectKind(Enum):
    """
    Every effect a chain can remember as its last one.

    Impact and notification variants are fully expanded (one member per
    style/type) so a replay knows exactly which trigger to repeat.
    """
    NONE = "none"
    SELECTION_CHANGED = "selection_changed"
    LIGHT_IMPACT = "light_impact"
    MEDIUM_IMPACT = "medium_impact"
    HEAVY_IMPACT = "heavy_impact"
    NOTIFICATION_SUCCESS = "notification_success"
    NOTIFICATION_ERROR = "notification_error"
    NOTIFICATION_WARNING = "notification_warning"

    @classmethod
    def for_impact(cls, style: ImpactStyle) -> EffectKind:
        """Effect kind for an impact of the given style."""
        return _IMPACT_KINDS[style]

    @classmethod
    def for_notification(cls, notification_type: NotificationType) -> EffectKind:
        """Effect kind for a notification of the given type."""
        return _NOTIFICATION_KINDS[notification_type]

    @property
    def impact_style(self) -> ImpactStyle | None:
        """Impact style for impact kinds, None otherwise."""
        for style, kind in _IMPACT_KINDS.items():
            if kind is self:
                return style
        return None

    @property
    def notification_type(self) -> NotificationType | None:
        """Notification type for notification kinds, None otherwise."""
        for notification_type, kind in _NOTIFICATION_KINDS.items():
            if kind is self:
                return notification_type
        return None


_IMPACT_KINDS: dict[ImpactStyle, EffectKind] = {
    ImpactStyle.LIGHT: EffectKind.LIGHT_IMPACT,
    ImpactStyle.MEDIUM: EffectKind.MEDIUM_IMPACT,
    ImpactStyle.HEAVY: EffectKind.HEAVY_IMPACT,
}

_NOTIFICATION_KINDS: dict[NotificationType, EffectKind] = {
    NotificationType.SUCCESS: EffectKind.NOTIFICATION_SUCCESS,
    NotificationType.ERROR: EffectKind.NOTIFICATION_ERROR,
    NotificationType.WARNING: EffectKind.NOTIFICATION_WARNING,
}


# =============================================================================
# DURATIONS
# =============================================================================

def milliseconds(value: int | float) -> timedelta:
    """Duration of `value` milliseconds."""
    return timedelta(milliseconds=value)


def seconds(value: int | float) -> timedelta:
    """Duration of `value` seconds."""
    return timedelta(seconds=value)


_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s)?\s*$")


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """
    Parse a duration from config or preset files.

    Accepts "200ms", "1s", "1.5s", bare numbers (milliseconds) and
    timedelta instances (returned as-is).

    Raises:
        ValueError: If the value is negative or not a recognised duration
    """
    if isinstance(value, timedelta):
        if value < timedelta(0):
            raise ValueError(f"Duration must not be negative: {value}")
        return value

    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")

    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Duration must not be negative: {value}")
        return milliseconds(value)

    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r} (expected e.g. '200ms' or '1s')")

    amount = float(match.group(1))
    unit = match.group(2) or "ms"
    return seconds(amount) if unit == "s" else milliseconds(amount)
