"""
engine/
-------
Playback & recording layer.

    from engine import Player, Selection, build_trace
"""

from engine.stepper  import (
    Player,
    PlayerState,
    SPEED_PRESETS,
    ManualScheduler,
    ThreadingScheduler,
    speed_for_level,
)
from engine.recorder import Selection, build_trace, export, preset_array, random_array

__all__ = [
    "Player",
    "PlayerState",
    "SPEED_PRESETS",
    "ManualScheduler",
    "ThreadingScheduler",
    "speed_for_level",
    "Selection",
    "build_trace",
    "export",
    "preset_array",
    "random_array",
]
