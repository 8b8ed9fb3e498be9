"""
Pool building for the bracket builder.
"""

from typing import List, Dict, Tuple
from dataclasses import dataclass, field

from app.models import Entrant, Discipline, Division, Belt
from app.services.divisions import classify_division

PoolKey = Tuple[Discipline, Division, Belt]


@dataclass
class Pool:
    """Entrants sharing discipline, division and belt; fed to the partitioner."""
    discipline: Discipline
    division: Division
    belt: Belt
    entrants: List[Entrant] = field(default_factory=list)

    @property
    def key(self) -> PoolKey:
        return (self.discipline, self.division, self.belt)

    @property
    def name(self) -> str:
        return f"{self.discipline.value} {self.division.value} {self.belt.value}"


def build_pools(entrants: List[Entrant]) -> Tuple[List[Pool], List[Entrant]]:
    """
    Split entrants into candidate pools.

    Entrants with no weight or no age are never classified; they are returned
    separately so the caller can route them straight to outliers.

    Args:
        entrants: Full entrant list, in input order

    Returns:
        (pools in first-seen key order, entrants with missing data)
    """
    pools: Dict[PoolKey, Pool] = {}
    missing_data: List[Entrant] = []

    for entrant in entrants:
        if entrant.has_missing_data:
            missing_data.append(entrant)
            continue

        division = classify_division(entrant.age, entrant.gender)
        key = (entrant.discipline, division, entrant.belt)
        if key not in pools:
            pools[key] = Pool(discipline=entrant.discipline, division=division, belt=entrant.belt)
        pools[key].entrants.append(entrant)

    return list(pools.values()), missing_data
