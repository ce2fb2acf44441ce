"""
Beverage catalog: beverage-type tags and their standard ABV percentages.
Unknown or missing types fall back to "other".
"""

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union


class BeverageType(str, Enum):
    BEER = "beer"
    WINE = "wine"
    SAKE = "sake"
    SHOCHU = "shochu"
    WHISKEY = "whiskey"
    COCKTAIL = "cocktail"
    OTHER = "other"


# Standard ABV (%) per beverage type.
ABV_PERCENTAGES: Mapping[BeverageType, float] = MappingProxyType({
    BeverageType.BEER: 5.0,
    BeverageType.WINE: 12.0,
    BeverageType.SAKE: 15.0,
    BeverageType.SHOCHU: 25.0,
    BeverageType.WHISKEY: 40.0,
    BeverageType.COCKTAIL: 20.0,
    BeverageType.OTHER: 10.0,
})

_LABELS: Mapping[BeverageType, str] = MappingProxyType({
    BeverageType.BEER: "Beer",
    BeverageType.WINE: "Wine",
    BeverageType.SAKE: "Sake",
    BeverageType.SHOCHU: "Shochu",
    BeverageType.WHISKEY: "Whiskey",
    BeverageType.COCKTAIL: "Cocktail",
    BeverageType.OTHER: "Other",
})


def parse_beverage_type(value: Union[BeverageType, str, None]) -> Optional[BeverageType]:
    """Return the BeverageType for a tag, or None if absent/unrecognized."""
    if isinstance(value, BeverageType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return BeverageType(value.strip().lower())
    except ValueError:
        return None


def abv_percent_for(beverage_type: Union[BeverageType, str, None]) -> float:
    """ABV percentage for a beverage type; "other" when absent or unknown."""
    parsed = parse_beverage_type(beverage_type)
    if parsed is None:
        return ABV_PERCENTAGES[BeverageType.OTHER]
    return ABV_PERCENTAGES[parsed]


def list_beverage_types() -> List[Tuple[str, str, float]]:
    """Return list of (key, name, abv_percent) for UI dropdowns."""
    return [(bt.value, f"{_LABELS[bt]} ({ABV_PERCENTAGES[bt]:g}%)", ABV_PERCENTAGES[bt]) for bt in BeverageType]
