"""Static country pool and the flag asset each identifier maps to."""

from typing import Dict, List

COUNTRIES: List[str] = [
    'Estonia',
    'France',
    'Germany',
    'Ireland',
    'Italy',
    'Nigeria',
    'Poland',
    'Spain',
    'UK',
    'Ukraine',
    'US',
]

_FLAG_ASSETS: Dict[str, str] = {c: f"flags/{c}.png" for c in COUNTRIES}


def flag_asset(country: str) -> str:
    """Return the image asset name for a country identifier.

    Raises KeyError for identifiers outside the pool.
    """
    return _FLAG_ASSETS[country]


def catalogue() -> List[dict]:
    return [{'country': c, 'flag': flag_asset(c)} for c in COUNTRIES]
