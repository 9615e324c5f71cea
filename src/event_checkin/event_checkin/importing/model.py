from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": list(self.errors),
            "logs": list(self.logs),
        }


@dataclass(frozen=True)
class SourceRow:
    """One data row keyed by canonical field name; line_no counts the header as 1."""

    line_no: int
    values: dict[str, str]
