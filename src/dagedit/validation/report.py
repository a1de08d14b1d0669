"""Validation report record."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationReport:
    """Health of a graph: errors invalidate it, warnings are advisory."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    is_valid: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "is_valid", not self.errors)

    def to_dict(self) -> dict:
        """Persisted ``validation_status`` shape."""
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: dict) -> ValidationReport:
        return cls(errors=tuple(data.get("errors", ())), warnings=tuple(data.get("warnings", ())))
