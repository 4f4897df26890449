"""Small helpers shared by the test modules."""

from datetime import timedelta

from haptic_player.feedback import MockBackend


def ms(value: float) -> timedelta:
    return timedelta(milliseconds=value)


def fired(backend: MockBackend) -> list[tuple[str, timedelta]]:
    """(effect value, time) pairs the backend executed, in order."""
    return [(record.effect.value, record.at) for record in backend.triggers]
