"""
recorder.py — Selections & Trace Recording
============================================
Turns "what the user picked" into a complete Trace.

Usage:
    sel   = Selection(algorithm="dijkstra", start=0, end=5)
    trace = build_trace(sel)          # exhausts the generator eagerly
    data  = export(sel, trace)        # serialisable snapshot for save/replay

A Selection is immutable: editing one (new array, new start node, a
re-weighted edge) means `sel.replace(...)`; `validate()` checks the result
against the chosen algorithm.  There is no module-level "current
algorithm" anywhere.
"""

import logging
import math
import random
from dataclasses import dataclass, field, replace as _replace
from numbers import Real
from typing import Any, Dict, Optional, Sequence, Tuple

from graph import Graph, create_default_graph
from algorithms import get_algorithm
from algorithms.trace import Trace

log = logging.getLogger(__name__)

MAX_ARRAY_SIZE = 30
DEFAULT_ARRAY: Tuple[float, ...] = (64, 34, 25, 12, 22, 11, 90, 45, 38, 71, 56, 8, 83, 19, 47)
DEFAULT_TARGET = 45
ARRAY_PRESETS  = ("sorted", "reversed")


# ---------------------------------------------------------------------------
# Selection: everything one trace depends on
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Selection:
    algorithm: str                 = "bubble_sort"
    values:    Tuple[float, ...]   = DEFAULT_ARRAY
    target:    float               = DEFAULT_TARGET
    graph:     Graph               = field(default_factory=create_default_graph)
    start:     int                 = 0
    end:       Optional[int]       = 5

    def __post_init__(self):
        # accept any sequence, store a tuple
        object.__setattr__(self, "values", tuple(self.values))

    def replace(self, **changes: Any) -> "Selection":
        return _replace(self, **changes)

    def validate(self, max_array_size: int = MAX_ARRAY_SIZE) -> "Selection":
        """Raise ValueError / InvalidGraph unless build_trace can run on this."""
        info = get_algorithm(self.algorithm)
        if info is None:
            raise ValueError(f"Unknown algorithm: {self.algorithm}")
        if "values" in info.inputs:
            if len(self.values) > max_array_size:
                raise ValueError(
                    f"array has {len(self.values)} elements, at most {max_array_size} allowed"
                )
            for v in self.values:
                _require_number(v, "array element")
        if "target" in info.inputs:
            _require_number(self.target, "target")
        if "start" in info.inputs:
            self.graph.require_node(self.start, "start")
        if "end" in info.inputs and self.end is not None:
            self.graph.require_node(self.end, "end")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "values":    list(self.values),
            "target":    self.target,
            "graph":     self.graph.to_dict(),
            "start":     self.start,
            "end":       self.end,
        }


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------
def build_trace(selection: Selection, max_array_size: int = MAX_ARRAY_SIZE) -> Trace:
    """Validate the selection and run its algorithm to completion."""
    selection.validate(max_array_size)
    info = get_algorithm(selection.algorithm)
    args = [getattr(selection, name) for name in info.inputs]
    trace = info.fn(*args)
    log.debug("built %s trace with %d snapshots", info.key, len(trace))
    return trace


def export(selection: Selection, trace: Trace) -> Dict[str, Any]:
    return {
        "selection": selection.to_dict(),
        "trace":     trace.to_dict(),
    }


def random_array(
    length: int = 15,
    max_value: int = 100,
    min_value: int = 5,
    rng: Optional[random.Random] = None,
) -> Tuple[int, ...]:
    """Random integers in [min_value, max_value] for a fresh sorting demo."""
    if not 0 <= length <= MAX_ARRAY_SIZE:
        raise ValueError(f"length must be between 0 and {MAX_ARRAY_SIZE}")
    if min_value > max_value:
        raise ValueError("min_value must not exceed max_value")
    rng = rng or random.Random()
    return tuple(rng.randint(min_value, max_value) for _ in range(length))


def preset_array(values: Sequence[float], preset: str) -> Tuple[float, ...]:
    """The same values ascending ("sorted") or descending ("reversed")."""
    if preset not in ARRAY_PRESETS:
        raise ValueError(f"unknown array preset {preset!r}; choose from {list(ARRAY_PRESETS)}")
    return tuple(sorted(values, reverse=preset == "reversed"))


def _require_number(value: Any, role: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValueError(f"{role} must be a finite number, got {value!r}")