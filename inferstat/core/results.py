"""Result types returned by the inferential tests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FailureReason(str, Enum):
    """Reasons a test could not be computed."""

    INVALID_SHAPE = "invalid_shape"  # groups are not a sequence of sequences
    LENGTH_MISMATCH = "length_mismatch"  # paired samples differ in length
    INSUFFICIENT_DATA = "insufficient_data"  # too few valid observations


@dataclass(frozen=True)
class AnalysisFailure:
    """Typed failure marker returned instead of a statistic.

    Failures are falsy, so ``if not result`` distinguishes them from a
    successful result object.

    Attributes:
        reason: Category of the failure
        message: Human-readable explanation
    """

    reason: FailureReason
    message: str = ""

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": False,
            "reason": self.reason.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson correlation with its significance.

    Attributes:
        r: Pearson correlation coefficient
        p: Two-tailed p-value of r
        n: Number of complete pairs used
    """

    r: float
    p: float
    n: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"r": self.r, "p": self.p, "n": self.n}
