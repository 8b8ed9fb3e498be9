"""
Division classification for the bracket builder.
Maps an entrant's age and gender onto a fixed division label.
"""

from app.models import Division, Gender
from app.core.config import DIVISION_BANDS, OLDEST_DIVISION, DIVISION_PRECEDENCE


def classify_division(age: int, gender: Gender) -> Division:
    """
    Classify an entrant into an age/gender division.

    Bands are exhaustive and non-overlapping; the two youngest bands are coed.

    Args:
        age: Entrant age in years
        gender: Entrant gender

    Returns:
        The matching Division
    """
    for max_age, template in DIVISION_BANDS:
        if age <= max_age:
            return Division(template.format(gender=gender.value))
    return Division(OLDEST_DIVISION.format(gender=gender.value))


def division_rank(division: Division) -> int:
    """Display rank, youngest first. Unmapped divisions sort last."""
    try:
        return DIVISION_PRECEDENCE.index(division.value)
    except ValueError:
        return len(DIVISION_PRECEDENCE)
