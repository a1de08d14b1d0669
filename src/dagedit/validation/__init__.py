"""Cycle detection and DAG validation."""

from dagedit.validation.cycles import find_cycle, has_cycle, would_create_cycle
from dagedit.validation.report import ValidationReport
from dagedit.validation.validator import (
    CYCLE_ERROR,
    DISCONNECTED_WARNING,
    MIN_NODES_WARNING,
    NO_EDGES_WARNING,
    SELF_LOOP_ERROR,
    validate,
)

__all__ = [
    "CYCLE_ERROR",
    "DISCONNECTED_WARNING",
    "MIN_NODES_WARNING",
    "NO_EDGES_WARNING",
    "SELF_LOOP_ERROR",
    "ValidationReport",
    "find_cycle",
    "has_cycle",
    "validate",
    "would_create_cycle",
]
