"""
Preset loader for YAML preset files.

Format:
    presets:
      - name: heartbeat
        description: Two heavy thumps, repeated
        steps:
          - impact: heavy
          - then: 120ms
          - impact: medium
          - then: 600ms
          - replay: {times: 3, interval: 720ms}
          - play
"""

from pathlib import Path
from typing import Any

import yaml

from ..feedback.types import ImpactStyle, NotificationType, parse_duration
from .preset import Preset, Step, get_builtin_presets

_SIMPLE_STEPS = {
    "selection": Step.selection,
    "selection_changed": Step.selection,
    "play": Step.play,
}


def load_presets(presets_file: Path | None = None) -> dict[str, Preset]:
    """
    Load all presets from a YAML file.

    Entries that fail to parse are skipped with a warning.

    Args:
        presets_file: YAML file with a top-level 'presets' list

    Returns:
        Dict mapping preset name to Preset. Empty if the file is missing.

    Raises:
        ValueError: If the file is not a mapping at the top level
        yaml.YAMLError: If the file is not valid YAML
    """
    result: dict[str, Preset] = {}

    if presets_file is None or not presets_file.exists():
        return result

    with open(presets_file) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"{presets_file}: expected a mapping with a 'presets' list, "
            f"got {type(data).__name__}"
        )

    for index, entry in enumerate(data.get("presets", [])):
        try:
            preset = parse_preset(entry)
            result[preset.name] = preset
        except (ValueError, TypeError, KeyError) as e:
            print(f"[PRESET] Warning: Skipping preset #{index + 1} in {presets_file}: {e}")

    return result


def get_presets(presets_file: Path | None = None) -> dict[str, Preset]:
    """Built-in presets overlaid with presets from file (file wins)."""
    presets = get_builtin_presets()
    presets.update(load_presets(presets_file))
    return presets


def parse_preset(entry: dict[str, Any]) -> Preset:
    """Build a Preset from one parsed YAML mapping."""
    if not isinstance(entry, dict):
        raise TypeError(f"Preset entry must be a mapping, got {type(entry).__name__}")

    steps = [parse_step(raw) for raw in entry.get("steps") or []]
    return Preset(
        name=entry["name"],
        description=entry.get("description", ""),
        steps=steps,
    )


def parse_step(raw: Any) -> Step:
    """
    Parse one step.

    Accepted forms:
        selection | play
        {impact: light|medium|heavy}
        {notification: success|error|warning}
        {then: 200ms}
        {replay: 3}
        {replay: {times: 2, interval: 300ms}}
    """
    if isinstance(raw, str):
        name = raw.strip().lower()
        if name not in _SIMPLE_STEPS:
            raise ValueError(f"Unknown step '{raw}'")
        return _SIMPLE_STEPS[name]()

    if not isinstance(raw, dict) or len(raw) != 1:
        raise ValueError(f"Step must be a name or a single-key mapping, got {raw!r}")

    key, value = next(iter(raw.items()))
    key = str(key).strip().lower()

    if key == "impact":
        return Step.impact(ImpactStyle(str(value).lower()))
    if key == "notification":
        return Step.notification(NotificationType(str(value).lower()))
    if key == "then":
        return Step.then(parse_duration(value))
    if key == "replay":
        if isinstance(value, dict):
            interval = value.get("interval")
            return Step.replay(
                _parse_times(value["times"]),
                parse_duration(interval) if interval is not None else None,
            )
        return Step.replay(_parse_times(value))

    raise ValueError(f"Unknown step '{key}'")


def _parse_times(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Replay times must be an integer, got {value!r}")
    return value


def save_presets(presets: list[Preset], presets_file: Path) -> None:
    """Write presets back out in the format load_presets() reads."""
    data = {
        "presets": [
            {
                "name": preset.name,
                "description": preset.description,
                "steps": [_dump_step(step) for step in preset.steps],
            }
            for preset in presets
        ]
    }

    with open(presets_file, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _dump_step(step: Step) -> Any:
    if step.action in ("selection", "play"):
        return step.action
    if step.action == "impact":
        return {"impact": step.style.value}
    if step.action == "notification":
        return {"notification": step.notification_type.value}
    if step.action == "then":
        return {"then": _dump_duration(step.duration)}
    if step.duration is None:
        return {"replay": step.times}
    return {"replay": {"times": step.times, "interval": _dump_duration(step.duration)}}


def _dump_duration(duration) -> str:
    ms = duration.total_seconds() * 1000
    return f"{ms:g}ms"
