"""
Error taxonomy for the repository manifest.

Two failure modes are kept apart so callers can tell garbled input
from well-formed input that breaks the schema:
- ParseError: the text is not well-formed JSON
- ValidationError: the value does not satisfy the manifest schema

ValidationError always carries every violated constraint, not just
the first one encountered.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


ROOT_LOCATION = "<root>"


class ManifestError(Exception):
    """Base class for manifest errors."""


@dataclass(frozen=True)
class Violation:
    """A single violated schema constraint."""
    location: str  # e.g. "repositories[2].upstreamSync.branch"
    message: str

    def to_dict(self) -> dict:
        return {'location': self.location, 'message': self.message}

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class ValidationError(ManifestError):
    """
    Raised when a manifest or repository record violates the schema.

    Attributes:
        violations: Every violated constraint, in schema order
    """

    def __init__(self, violations: Iterable[Violation], subject: str = "manifest"):
        self.violations: Tuple[Violation, ...] = tuple(violations)
        self.subject = subject
        super().__init__(self._format())

    def _format(self) -> str:
        count = len(self.violations)
        noun = "violation" if count == 1 else "violations"
        lines = [f"Invalid {self.subject}: {count} {noun}"]
        lines.extend(f"  - {v}" for v in self.violations)
        return "\n".join(lines)

    @property
    def locations(self) -> Tuple[str, ...]:
        """Locations of all violations, for quick membership checks."""
        return tuple(v.location for v in self.violations)


class ParseError(ManifestError):
    """Raised when manifest text is not well-formed JSON."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(f"Invalid JSON: {message}")
