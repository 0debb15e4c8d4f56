"""
Result classes for metadata write operations.

Per-field validation never raises for malformed values. Instead each field
yields a ``FieldOutcome`` so callers can report what was skipped and why.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class FieldOutcome:
    """Outcome of validating one field update.

    Attributes:
        key: Canonical field name
        accepted: Whether the value will be written
        value: The value as it will be serialized (None when skipped)
        reason: Why the update was skipped (None when accepted)
    """

    key: str
    accepted: bool
    value: Any = None
    reason: str | None = None

    @classmethod
    def accept(cls, key: str, value: Any) -> "FieldOutcome":
        return cls(key=key, accepted=True, value=value)

    @classmethod
    def skip(cls, key: str, reason: str) -> "FieldOutcome":
        return cls(key=key, accepted=False, reason=reason)

    def __str__(self) -> str:
        """Get string representation of the outcome."""
        if self.accepted:
            return f"✓ {self.key}: {self.value}"
        return f"✗ {self.key}: skipped ({self.reason})"


@dataclass
class WriteResult:
    """Result of writing metadata to a document.

    Attributes:
        output_path: Where the package was written
        outcomes: One outcome per recognized field in the update set
    """

    output_path: Path
    outcomes: list[FieldOutcome] = field(default_factory=list)

    @property
    def written(self) -> list[str]:
        """Canonical names of fields that were written."""
        return [o.key for o in self.outcomes if o.accepted]

    @property
    def skipped(self) -> list[FieldOutcome]:
        """Outcomes of fields that were skipped."""
        return [o for o in self.outcomes if not o.accepted]

    def __str__(self) -> str:
        """Get string representation of the result."""
        return (
            f"Wrote {len(self.written)} field(s) to {self.output_path}"
            f" ({len(self.skipped)} skipped)"
        )
