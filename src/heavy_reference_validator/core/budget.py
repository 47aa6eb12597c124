"""Budget evaluation.

Compares a traversal total against the configured byte budget and
produces the verdict handed to reporting.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .types import AssetKey

if TYPE_CHECKING:
    from .traversal import TraversalResult

BYTES_PER_KILOBYTE = 1024


class Strictness(str, Enum):
    """Severity used when the budget is exceeded."""

    WARNING = "warning"
    ERROR = "error"


class VerdictStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class Verdict:
    """Outcome of a validation run.

    Attributes:
        status: PASS, WARN, FAIL, or NOT_APPLICABLE
        total_bytes: Cumulative size of the root's references
        root: Validation root
        max_bytes: Budget the total was compared against (None if not evaluated)
        traversal: Traversal bookkeeping, when a traversal ran
    """

    status: VerdictStatus
    total_bytes: int
    root: AssetKey
    max_bytes: int | None = None
    traversal: "TraversalResult | None" = field(default=None, compare=False, repr=False)

    @property
    def over_budget(self) -> bool:
        return self.status in (VerdictStatus.WARN, VerdictStatus.FAIL)


def kilobytes_to_bytes(kilobytes: int) -> int:
    """Convert a configured kilobyte budget to bytes (1 KB = 1024 bytes)."""
    return kilobytes * BYTES_PER_KILOBYTE


def evaluate_budget(
    total_bytes: int,
    max_bytes: int,
    strictness: Strictness,
    root: AssetKey,
    traversal: "TraversalResult | None" = None,
) -> Verdict:
    """Compare a total against a budget.

    A total equal to the budget passes. Anything above it warns or fails
    depending on strictness.

    Args:
        total_bytes: Summed size of the root's references
        max_bytes: Largest allowed total
        strictness: ERROR to fail on overflow, WARNING to warn
        root: Validation root
        traversal: Optional traversal result to attach to the verdict

    Returns:
        Verdict for the run
    """
    if total_bytes <= max_bytes:
        status = VerdictStatus.PASS
    elif strictness is Strictness.ERROR:
        status = VerdictStatus.FAIL
    else:
        status = VerdictStatus.WARN

    return Verdict(
        status=status,
        total_bytes=total_bytes,
        root=root,
        max_bytes=max_bytes,
        traversal=traversal,
    )


def not_applicable(root: AssetKey) -> Verdict:
    """Verdict for roots that are out of scope for this validator."""
    return Verdict(status=VerdictStatus.NOT_APPLICABLE, total_bytes=0, root=root)
