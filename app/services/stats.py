"""
Derived bracket statistics.

Every mutation of a bracket's membership must be followed by
recalculate_bracket_stats so the derived fields never go stale.
"""

from typing import List

from app.models import Bracket, Entrant


def weight_spread(entrants: List[Entrant]) -> float:
    """Absolute weight difference between the heaviest and lightest entrant."""
    if not entrants:
        return 0.0
    weights = [entrant.weight for entrant in entrants]
    return max(weights) - min(weights)


def weight_spread_percent(entrants: List[Entrant]) -> float:
    """Spread as a percentage of the lightest weight (0 when that weight is 0)."""
    if not entrants:
        return 0.0
    min_weight = min(entrant.weight for entrant in entrants)
    if min_weight <= 0:
        return 0.0
    return weight_spread(entrants) / min_weight * 100


def age_gap(entrants: List[Entrant]) -> int:
    if len(entrants) < 2:
        return 0
    ages = [entrant.age for entrant in entrants]
    return max(ages) - min(ages)


def recalculate_bracket_stats(bracket: Bracket) -> Bracket:
    """
    Re-sort a bracket's membership by weight and recompute its derived fields.

    Args:
        bracket: The bracket to refresh (updated in place)

    Returns:
        The same bracket, for chaining
    """
    bracket.competitors = sorted(bracket.competitors, key=lambda entrant: entrant.weight)

    if not bracket.competitors:
        bracket.avg_weight = 0.0
        bracket.weight_spread_percent = 0.0
        bracket.age_gap = 0
        return bracket

    total_weight = sum(entrant.weight for entrant in bracket.competitors)
    bracket.avg_weight = total_weight / len(bracket.competitors)
    bracket.weight_spread_percent = weight_spread_percent(bracket.competitors)
    bracket.age_gap = age_gap(bracket.competitors)
    return bracket
