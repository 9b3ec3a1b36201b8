"""
edge.py — Graph Edge
====================
Connects two nodes with a weight.

Design decisions:
  - `source` and `target` are node ids, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Edges are stored directionally (source → target) but every algorithm
    treats them as undirected.
  - Weights may be negative; only Bellman-Ford gives that a meaning.
  - JSON uses the renderer's `from` / `to` keys.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the tail node.
        target : ID of the head node.
        weight : Numeric cost.
    """

    source: int
    target: int
    weight: float = 1

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def other_end(self, node_id: int) -> Optional[int]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "from":   self.source,
            "to":     self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=int(data["from"]),
            target=int(data["to"]),
            weight=data.get("weight", 1),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight})"
