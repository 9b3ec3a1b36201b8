"""
trace.py — Complete, Immutable Algorithm Traces
================================================
A Trace is the full, precomputed, ordered sequence of Snapshots for one
algorithm run plus the pseudocode listing its `code_line`s index into.

    trace = record("bubble_sort", PSEUDOCODE, bubble_sort([5, 3, 8, 1]))
    trace[0].description            # "Starting Bubble Sort"
    trace.code_line_text(3)         # pseudocode of step 3

record() drives the generator EAGERLY to completion, so no snapshot is
visible before the whole run exists.  It rejects traces that break the
contract (empty, or a code_line outside the listing).
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Sequence, Tuple

from algorithms.step import Snapshot

log = logging.getLogger(__name__)


class TraceError(RuntimeError):
    """A generator produced a trace that violates the snapshot contract."""


@dataclass(frozen=True, eq=False)
class Trace:
    """
    Attributes:
        algorithm  : Registry key of the algorithm that produced it.
        pseudocode : The algorithm's fixed pseudocode listing.
        snapshots  : Every Snapshot, index 0 = initial state, last = terminal.
    """

    algorithm:  str
    pseudocode: Tuple[str, ...]
    snapshots:  Tuple[Snapshot, ...]

    def __post_init__(self):
        if not self.snapshots:
            raise TraceError(f"{self.algorithm}: trace is empty")
        last_line = len(self.pseudocode) - 1
        for i, snap in enumerate(self.snapshots):
            if not 0 <= snap.code_line <= last_line:
                raise TraceError(
                    f"{self.algorithm}: snapshot {i} points at code line "
                    f"{snap.code_line}, listing has {len(self.pseudocode)} lines"
                )

    # -- sequence protocol --
    def __len__(self) -> int:
        return len(self.snapshots)

    def __getitem__(self, idx: int) -> Snapshot:
        return self.snapshots[idx]

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self.snapshots)

    # -- helpers --
    @property
    def initial(self) -> Snapshot:
        return self.snapshots[0]

    @property
    def final(self) -> Snapshot:
        return self.snapshots[-1]

    def code_line_text(self, idx: int) -> str:
        """Pseudocode text active at snapshot idx."""
        return self.pseudocode[self.snapshots[idx].code_line]

    def same_as(self, other: "Trace") -> bool:
        """Field-for-field equality (traces compare by identity otherwise)."""
        return (
            self.algorithm == other.algorithm
            and self.pseudocode == other.pseudocode
            and self.snapshots == other.snapshots
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm":   self.algorithm,
            "pseudocode":  list(self.pseudocode),
            "total_steps": len(self.snapshots),
            "snapshots":   [s.to_dict() for s in self.snapshots],
        }


def record(algorithm: str, pseudocode: Sequence[str], steps: Iterable[Snapshot]) -> Trace:
    """Exhaust a snapshot generator and freeze the result into a Trace."""
    started = time.monotonic()
    trace = Trace(algorithm, tuple(pseudocode), tuple(steps))
    log.debug(
        "recorded %s: %d snapshots in %.2f ms",
        algorithm, len(trace), (time.monotonic() - started) * 1000,
    )
    return trace
