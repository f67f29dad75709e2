"""Exception types raised by spdist.

All exceptions derive from `SpdistError`. Input problems also derive from
``ValueError`` so callers that already guard graph code with ``except
ValueError`` keep working.
"""

from __future__ import annotations

from typing import Any, Hashable


class SpdistError(Exception):
    """Base class for all spdist errors."""


class PreconditionError(SpdistError, ValueError):
    """Raised when a request is invalid before any computation starts.

    The engine detects these before touching any cached state.
    """


class UnknownNodeError(PreconditionError):
    """Raised when a source or target node is not part of the graph."""

    def __init__(self, node: Hashable, role: str = "node") -> None:
        super().__init__(f"Specified {role} node '{node}' is not part of the graph.")
        self.node = node
        self.role = role


class WeightError(SpdistError, ValueError):
    """Raised when an edge with a negative (or NaN) weight is relaxed.

    Nodes finalized before the offending edge was examined stay cached.
    """

    def __init__(self, edge: Any, weight: Any) -> None:
        super().__init__(
            f"Encountered negative edge weight {weight!r} for edge {edge!r}."
        )
        self.edge = edge
        self.weight = weight


class EmptyFrontierError(SpdistError, IndexError):
    """Raised when popping from an empty frontier.

    Correct engine logic never triggers this; it signals a broken invariant.
    """
