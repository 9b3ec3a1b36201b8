"""
node.py — Graph Node
====================
A node is pure structure: integer id, display label and canvas position.
Algorithm state (visited, distance, key, …) never lives on the node.  It
lives in the Snapshots the generators yield, so one graph is shared by
every snapshot of a trace.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id    : 0-based dense integer id (index into the graph's node tuple).
        label : Human-readable name shown on the canvas, e.g. "A".
        x, y  : Canvas coordinates for the renderer.
    """

    id:    int
    label: str
    x:     float = 0.0
    y:     float = 0.0

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            id=int(data["id"]),
            label=str(data.get("label", data["id"])),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.0f},{self.y:.0f}))"
