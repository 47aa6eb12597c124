"""Diagnostics for validation verdicts.

Turns a Verdict into the message shown to users and into a JSON-ready
dictionary for tooling.
"""

from dataclasses import dataclass, field
from typing import Any

from .core.budget import Verdict, VerdictStatus
from .core.types import AssetKey

SEVERITY_BY_STATUS = {
    VerdictStatus.FAIL: "error",
    VerdictStatus.WARN: "warning",
    VerdictStatus.PASS: "info",
}


@dataclass
class Diagnostic:
    """User-facing result of a validation run.

    Attributes:
        severity: "error", "warning" or "info"
        message: Headline message
        details: Additional lines (budget, heaviest references)
        heaviest: Largest counted references, biggest first
    """

    severity: str
    message: str
    details: list[str] = field(default_factory=list)
    heaviest: list[tuple[AssetKey, int]] = field(default_factory=list)

    def format(self) -> str:
        lines = [f"[{self.severity.upper()}] {self.message}"]
        lines.extend(f"  {line}" for line in self.details)
        return "\n".join(lines)


def format_size(size_bytes: int) -> str:
    """Format a byte count for humans.

    Example:
        5000000 -> "4.77 MB"
    """
    size = float(size_bytes)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} GB"


def build_diagnostic(verdict: Verdict, top: int = 5) -> Diagnostic | None:
    """Build the diagnostic for a verdict.

    Args:
        verdict: Verdict from ``validate``
        top: Number of heaviest references to list

    Returns:
        Diagnostic, or None for NOT_APPLICABLE verdicts
    """
    if verdict.status is VerdictStatus.NOT_APPLICABLE:
        return None

    severity = SEVERITY_BY_STATUS[verdict.status]
    if verdict.over_budget:
        message = f"Heavy references in asset {verdict.root}!"
    else:
        message = f"References of asset {verdict.root} are within budget"

    details = [
        f"Total referenced size: {format_size(verdict.total_bytes)} ({verdict.total_bytes} bytes)",
    ]
    if verdict.max_bytes is not None:
        details.append(f"Budget: {format_size(verdict.max_bytes)} ({verdict.max_bytes} bytes)")

    heaviest: list[tuple[AssetKey, int]] = []
    if verdict.traversal is not None:
        heaviest = verdict.traversal.heaviest(top)
        if verdict.traversal.truncated:
            details.append("Traversal stopped early; total is a lower bound")
    for key, size in heaviest:
        details.append(f"{format_size(size):>10}  {key}")

    return Diagnostic(severity=severity, message=message, details=details, heaviest=heaviest)


def verdict_to_dict(verdict: Verdict, top: int = 5) -> dict[str, Any]:
    """Serialize a verdict for JSON output."""
    data: dict[str, Any] = {
        "root": str(verdict.root),
        "status": verdict.status.value,
        "total_bytes": verdict.total_bytes,
        "max_bytes": verdict.max_bytes,
    }

    if verdict.traversal is not None:
        data["visited"] = len(verdict.traversal.visited)
        data["truncated"] = verdict.traversal.truncated
        data["heaviest"] = [
            {"asset": str(key), "size_bytes": size}
            for key, size in verdict.traversal.heaviest(top)
        ]

    return data
