"""Turn unused open ranges into user-facing diagnostics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from unused_opens._data import Range
from unused_opens._data import Settings
from unused_opens._data import Snapshot
from unused_opens._detection import get_unused_opens


@dataclass(frozen=True)
class DiagnosticDescriptor:
    id: str
    title: str
    message_format: str
    category: str
    default_severity: str
    is_enabled_by_default: bool
    custom_tags: tuple[str, ...] = ()


UNUSED_OPENS_DESCRIPTOR = DiagnosticDescriptor(
    id="IDE0005",
    title="Remove unused open declarations",
    message_format="Open declaration can be removed.",
    category="Style",
    default_severity="hidden",
    is_enabled_by_default=True,
    custom_tags=("Unnecessary",),
)


@dataclass(frozen=True)
class Diagnostic:
    descriptor: DiagnosticDescriptor
    location: Range
    source_name: str

    @property
    def message(self) -> str:
        return self.descriptor.message_format

    def __str__(self) -> str:
        start = self.location.start
        return (
            f"{self.source_name}:{start.line}:{start.column}: "
            f"{self.descriptor.id} {self.message}"
        )


def get_unused_open_ranges(
    snapshot: Snapshot, settings: Settings,
) -> Optional[list[Range]]:
    """Unused open ranges of a snapshot, or None if the check is disabled."""
    if not settings.unused_opens:
        return None
    return get_unused_opens(
        snapshot.source, snapshot.parsed_input, snapshot.symbol_uses,
    )


def analyze_snapshot(snapshot: Snapshot, settings: Settings) -> list[Diagnostic]:
    """Report every unused open statement of a snapshot as a diagnostic."""
    ranges = get_unused_open_ranges(snapshot, settings)
    if ranges is None:
        return []

    return [
        Diagnostic(
            descriptor=UNUSED_OPENS_DESCRIPTOR,
            location=range_,
            source_name=snapshot.source_name,
        )
        for range_ in ranges
    ]
