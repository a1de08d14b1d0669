"""Exception hierarchy for dagedit.

Structural violations are raised by the graph model and the wire format and
caught at the edit session boundary, where they become rejected results.
Validation findings are never exceptions.
"""

from __future__ import annotations


class DagEditError(Exception):
    """Base class for all dagedit errors."""


class RejectedEdit(DagEditError):
    """A mutation was refused; the graph is unchanged."""

    reason: str = "Edit rejected"

    def __init__(self, reason: str | None = None) -> None:
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class CycleError(RejectedEdit):
    reason = "Connection would create a cycle"


class SelfLoopError(RejectedEdit):
    reason = "Self-referential edges are not allowed"


class DuplicateEdgeError(RejectedEdit):
    reason = "Connection already exists"


class UnknownNodeError(RejectedEdit):
    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Unknown node '{node_id}'")


class DuplicateIdError(RejectedEdit):
    def __init__(self, kind: str, item_id: str) -> None:
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Duplicate {kind} id '{item_id}'")


class MalformedImportError(DagEditError):
    """Incoming serialized graph does not have the expected shape."""

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = "Invalid file format"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class StoreError(DagEditError):
    """Raised by a persistence collaborator when a save or load fails."""
