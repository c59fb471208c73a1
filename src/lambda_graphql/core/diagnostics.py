"""
Diagnostics and result types produced while extracting and generating.

Extraction of a single entity either succeeds with a value or fails with a
list of diagnostics. The failure never aborts the run; the offending entity is
left out of the IR and generation continues with what remains.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class Severity(StrEnum):
    """Severity levels for diagnostics."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode(StrEnum):
    """Stable diagnostic identifiers."""

    TYPE_EXTRACTION = "LGQL001"
    OPERATION_EXTRACTION = "LGQL002"
    SCHEMA_GENERATION = "LGQL003"
    RETURN_TYPE_FALLBACK = "LGQL004"
    DATA_SOURCE_CONFLICT = "LGQL005"


_TITLES: dict[DiagnosticCode, str] = {
    DiagnosticCode.TYPE_EXTRACTION: "Type extraction failed",
    DiagnosticCode.OPERATION_EXTRACTION: "Operation extraction failed",
    DiagnosticCode.SCHEMA_GENERATION: "Schema generation failed",
    DiagnosticCode.RETURN_TYPE_FALLBACK: "Return type extraction failed",
    DiagnosticCode.DATA_SOURCE_CONFLICT: "Conflicting data source",
}


@dataclass(frozen=True)
class Diagnostic:
    """A single problem tied to a location in the IR."""

    code: DiagnosticCode
    severity: Severity
    message: str
    location: str | None = None  # e.g. "types[2]" or "operations[0].arguments[1]"
    entity: str | None = None  # name of the offending type/operation, if known

    @property
    def title(self) -> str:
        return _TITLES[self.code]

    def format(self) -> str:
        """Format as ``LGQL001 warning at types[2]: message``."""
        where = f" at {self.location}" if self.location else ""
        return f"{self.code.value} {self.severity.value}{where}: {self.message}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful extraction of an IR fragment, with any informational notes."""

    value: T
    notes: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class Failed:
    """Failed extraction; carries the reasons."""

    diagnostics: tuple[Diagnostic, ...]


Result = Ok[T] | Failed


@dataclass
class DiagnosticBag:
    """Accumulates diagnostics across a run."""

    items: list[Diagnostic] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)

    def extend(self, diagnostics: tuple[Diagnostic, ...] | list[Diagnostic]) -> None:
        self.items.extend(diagnostics)

    def by_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.items if d.severity == severity]

    @property
    def has_warnings(self) -> bool:
        """True if any diagnostic is WARNING or worse."""
        return any(d.severity in (Severity.WARNING, Severity.ERROR) for d in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
