"""Current BAC estimate: total BAC plus its status level."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from bac_estimator.calculations import Profile, total_bac
from bac_estimator.drinks import DrinkEvent
from bac_estimator.status import DISPLAY, StatusLevel, classify


@dataclass(frozen=True)
class BACResult:
    value: float
    status_level: StatusLevel

    def to_dict(self) -> dict[str, Any]:
        display = DISPLAY[self.status_level]
        return {
            "bac": round(self.value, 4),
            "status": self.status_level.value,
            "description": display.description,
            "icon": display.icon,
            "color": display.color,
        }


def estimate(drinks: Iterable[DrinkEvent], profile: Profile, observed_at: datetime) -> BACResult:
    bac = total_bac(drinks, profile, observed_at)
    return BACResult(value=bac, status_level=classify(bac))
