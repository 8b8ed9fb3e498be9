"""
Display ordering for brackets. Never changes membership.
"""

from typing import List, Tuple

from app.models import Bracket, Belt, Discipline
from app.core.config import DISCIPLINE_PRECEDENCE, BELT_RANKS, UNKNOWN_RANK
from app.services.divisions import division_rank


def discipline_rank(discipline: Discipline) -> int:
    try:
        return DISCIPLINE_PRECEDENCE.index(discipline.value)
    except ValueError:
        return len(DISCIPLINE_PRECEDENCE)


def belt_rank(belt: Belt) -> int:
    """Shared rank for equivalent belts across naming schemes (e.g. Blue and Intermediate)."""
    return BELT_RANKS.get(belt.value, UNKNOWN_RANK)


def bracket_sort_key(bracket: Bracket) -> Tuple[int, int, int, str]:
    # Skill level is read from the first (lightest) member
    if bracket.competitors:
        skill = belt_rank(bracket.competitors[0].belt)
    else:
        skill = UNKNOWN_RANK
    return (
        discipline_rank(bracket.discipline),
        skill,
        division_rank(bracket.division),
        bracket.name,
    )


def sort_brackets(brackets: List[Bracket]) -> List[Bracket]:
    """
    Order brackets by discipline, belt rank, division, then name.

    Args:
        brackets: Brackets in any order

    Returns:
        A new list in display order
    """
    return sorted(brackets, key=bracket_sort_key)
