"""
BAC estimator: Widmark-based BAC estimate and status from timestamped drinks.
Demo CLI from project root: python -m bac_estimator.main
"""

from bac_estimator.catalog import (
    ABV_PERCENTAGES,
    BeverageType,
    abv_percent_for,
    list_beverage_types,
    parse_beverage_type,
)
from bac_estimator.drinks import (
    ETHANOL_DENSITY,
    DrinkEvent,
    grams_for_drink,
    grams_of_alcohol,
)
from bac_estimator.calculations import (
    METABOLISM_RATE,
    Profile,
    Sex,
    bac_contribution,
    bac_curve,
    elapsed_hours,
    hours_until_sober,
    total_bac,
)
from bac_estimator.status import StatusLevel, classify, describe
from bac_estimator.estimate import BACResult, estimate
from bac_estimator.graph import curve_data, save_bac_graph

__all__ = [
    "BACResult",
    "BeverageType",
    "DrinkEvent",
    "Profile",
    "Sex",
    "StatusLevel",
    "estimate",
    "total_bac",
    "bac_contribution",
    "bac_curve",
    "elapsed_hours",
    "hours_until_sober",
    "classify",
    "describe",
    "grams_of_alcohol",
    "grams_for_drink",
    "abv_percent_for",
    "parse_beverage_type",
    "list_beverage_types",
    "curve_data",
    "save_bac_graph",
    "ABV_PERCENTAGES",
    "ETHANOL_DENSITY",
    "METABOLISM_RATE",
]
