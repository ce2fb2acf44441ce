"""BAC calculations using Widmark-style rise and linear elimination.

Model:
- Rise: BAC = [grams / (weight_kg * r * 1000)] * 100
- r = 0.68 (male), 0.55 (female), 0.68 when sex is not given
- Elimination: 0.015 BAC percentage points per hour
- Each drink decays from its own timestamp; the total is the sum of the
  individually clamped contributions.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from bac_estimator.drinks import DrinkEvent, grams_for_drink

logger = logging.getLogger(__name__)


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: Union["Sex", str, None]) -> "Sex":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UNSPECIFIED


# Distribution ratio (Widmark r)
R_MALE = 0.68
R_FEMALE = 0.55

DISTRIBUTION_RATIOS: Mapping[Sex, float] = MappingProxyType({
    Sex.MALE: R_MALE,
    Sex.FEMALE: R_FEMALE,
    Sex.UNSPECIFIED: R_MALE,
})

# Elimination rate (% BAC per hour)
METABOLISM_RATE = 0.015


@dataclass(frozen=True)
class Profile:
    weight_kg: Optional[float]
    sex: Sex = Sex.UNSPECIFIED


def distribution_ratio(sex: Union[Sex, str, None]) -> float:
    return DISTRIBUTION_RATIOS[Sex.parse(sex)]


def elapsed_hours(occurred_at: datetime, observed_at: datetime) -> float:
    """Hours between a drink and the observation instant, never negative."""
    return max(0.0, (observed_at - occurred_at).total_seconds() / 3600.0)


def initial_bac(alcohol_grams: float, weight_kg: Optional[float], sex: Union[Sex, str, None]) -> float:
    """Immediate BAC rise (%) from a single dose of alcohol."""
    if weight_kg is None or weight_kg <= 0:
        return 0.0
    r = distribution_ratio(sex)
    return (alcohol_grams / (weight_kg * r * 1000.0)) * 100.0


def bac_contribution(
    alcohol_grams: float,
    weight_kg: Optional[float],
    sex: Union[Sex, str, None],
    elapsed: float,
) -> float:
    """BAC (%) left from one dose after `elapsed` hours, clamped at 0."""
    if weight_kg is None or weight_kg <= 0:
        logger.debug("non-positive weight %r, contribution is 0", weight_kg)
        return 0.0
    rise = initial_bac(alcohol_grams, weight_kg, sex)
    return max(0.0, rise - METABOLISM_RATE * max(0.0, elapsed))


def _contribution(drink: DrinkEvent, profile: Profile, observed_at: datetime) -> float:
    return bac_contribution(
        grams_for_drink(drink),
        profile.weight_kg,
        profile.sex,
        elapsed_hours(drink.occurred_at, observed_at),
    )


def total_bac(drinks: Iterable[DrinkEvent], profile: Profile, observed_at: datetime) -> float:
    """BAC (%) at `observed_at` from independently decayed drink contributions."""
    return math.fsum(_contribution(d, profile, observed_at) for d in drinks)


def bac_curve(
    drinks: Iterable[DrinkEvent],
    profile: Profile,
    start: datetime,
    end: datetime,
    step_hours: float = 0.25,
) -> List[Tuple[datetime, float]]:
    """Return (time, bac_percent) pairs from start to end inclusive for graphing."""
    if step_hours <= 0:
        raise ValueError("step_hours must be > 0")
    drinks = list(drinks)
    step = timedelta(hours=step_hours)

    points: List[Tuple[datetime, float]] = []
    t = start
    while t <= end:
        points.append((t, total_bac(drinks, profile, t)))
        t += step
    return points


def hours_until_sober(drinks: Iterable[DrinkEvent], profile: Profile, observed_at: datetime) -> float:
    """Hours from `observed_at` until the estimate reaches 0.

    Every contribution falls linearly, so the total hits 0 when the slowest
    drink does.
    """
    remaining = 0.0
    for d in drinks:
        rise = initial_bac(grams_for_drink(d), profile.weight_kg, profile.sex)
        if rise <= 0:
            continue
        # Signed: a future drink still has its wait until it starts decaying.
        since_drink = (observed_at - d.occurred_at).total_seconds() / 3600.0
        remaining = max(remaining, rise / METABOLISM_RATE - since_drink)
    return remaining
