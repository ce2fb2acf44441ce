"""Drink events and alcohol content helpers.

grams = volume_ml * (abv% / 100) * ethanol density
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bac_estimator.catalog import BeverageType, abv_percent_for

logger = logging.getLogger(__name__)

# Ethanol density (g/mL) for volume x ABV -> grams.
ETHANOL_DENSITY = 0.789


@dataclass(frozen=True)
class DrinkEvent:
    """One recorded drink. volume_ml None means the amount was not entered."""

    volume_ml: Optional[float]
    beverage_type: Optional[BeverageType]
    occurred_at: datetime


def grams_of_alcohol(volume_ml: float, abv_percent: float) -> float:
    """Convert milliliters and ABV (0 to 100) to grams of ethanol."""
    return volume_ml * (abv_percent / 100.0) * ETHANOL_DENSITY


def grams_for_drink(drink: DrinkEvent) -> float:
    """Grams of ethanol in a drink event; 0 when volume is unspecified."""
    if drink.volume_ml is None or drink.volume_ml <= 0:
        logger.debug("drink at %s has no volume, counting 0 g", drink.occurred_at)
        return 0.0
    return grams_of_alcohol(drink.volume_ml, abv_percent_for(drink.beverage_type))
