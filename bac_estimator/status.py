"""Status levels for an estimated BAC."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class StatusLevel(str, Enum):
    """Severity levels, compared by severity rather than by name."""

    NORMAL = "normal"
    MILD = "mild"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other):
        if not isinstance(other, StatusLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, StatusLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, StatusLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, StatusLevel):
            return NotImplemented
        return self.rank >= other.rank


# Lower bound (%) of each level, inclusive. The last level is unbounded.
THRESHOLDS: Tuple[Tuple[float, StatusLevel], ...] = (
    (0.20, StatusLevel.SEVERE),
    (0.10, StatusLevel.HIGH),
    (0.05, StatusLevel.MODERATE),
    (0.02, StatusLevel.MILD),
)


@dataclass(frozen=True)
class StatusDisplay:
    description: str
    icon: str
    color: str  # hex, for charts and badges


DISPLAY: Mapping[StatusLevel, StatusDisplay] = MappingProxyType({
    StatusLevel.NORMAL: StatusDisplay("Normal", "🙂", "#22c55e"),
    StatusLevel.MILD: StatusDisplay("Slightly tipsy", "😐", "#eab308"),
    StatusLevel.MODERATE: StatusDisplay("Reduced attention", "😵‍💫", "#f97316"),
    StatusLevel.HIGH: StatusDisplay("Clearly intoxicated", "😵", "#ef4444"),
    StatusLevel.SEVERE: StatusDisplay("Heavily intoxicated", "💀", "#a855f7"),
})


def classify(bac: float) -> StatusLevel:
    for lower, level in THRESHOLDS:
        if bac >= lower:
            return level
    return StatusLevel.NORMAL


def describe(level: StatusLevel) -> str:
    return DISPLAY[level].description


def bands() -> Tuple[Tuple[float, float, StatusLevel], ...]:
    """(lower, upper, level) per level in severity order; upper is inf for the last."""
    lowers = [0.0] + sorted(lower for lower, _ in THRESHOLDS)
    uppers = lowers[1:] + [float("inf")]
    return tuple(zip(lowers, uppers, sorted(StatusLevel)))
