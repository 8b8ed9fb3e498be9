"""
Drag compatibility policy.

Decides whether an operator may even attempt to drop an entrant onto a
bracket. This rule set is looser than is_valid_group and is maintained on its
own: it never checks weight or the exact age gap.
"""

from app.models import Bracket, Entrant
from app.core.config import MIN_AGE_FOR_ADULT_BRACKET


def can_drop(bracket: Bracket, entrant: Entrant) -> bool:
    """
    Check whether an entrant may be dropped onto a bracket.

    Rules:
    - Discipline must match exactly
    - Adult/Masters brackets reject entrants younger than 13
    - Gendered divisions reject entrants of the other gender

    Args:
        bracket: The drop target
        entrant: The entrant being dragged

    Returns:
        True if the drop is allowed
    """
    if entrant.discipline != bracket.discipline:
        return False

    if bracket.division.is_adult and entrant.age < MIN_AGE_FOR_ADULT_BRACKET:
        return False

    division_gender = bracket.division.gender
    if division_gender is not None and entrant.gender != division_gender:
        return False

    return True
