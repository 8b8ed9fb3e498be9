"""
Bracket Partitioner - Greedy Sliding-Window Grouping
=====================================================

Splits each pool into brackets of 3-5 entrants using a first-fit greedy scan:

- Pool sorted ascending by weight
- At the cursor, try windows in the size order derived from the target size
- Accept the first window that passes is_valid_group and jump past it
- Otherwise the entrant at the cursor becomes an outlier

No backtracking and no re-ordering. The result is deterministic for a given
(entrants, settings) pair but is not guaranteed to minimize outliers.
"""

import re
from typing import List, Tuple

from app.models import (
    Entrant, Bracket, BracketSettings, ProcessingResult, OutlierReason
)
from app.core.config import SIZE_PRIORITY, DEFAULT_SIZE_PRIORITY
from app.core.logging_config import get_logger
from app.services.pools import Pool, build_pools
from app.services.validator import is_valid_group
from app.services.stats import recalculate_bracket_stats
from app.services.sorter import sort_brackets

logger = get_logger(__name__)


def window_sizes(target_bracket_size: int) -> List[int]:
    """Window sizes to try, target first, then the rest largest first."""
    return SIZE_PRIORITY.get(target_bracket_size, DEFAULT_SIZE_PRIORITY)


def _slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


class BracketPartitioner:
    """
    Partitions one pool at a time into brackets and outliers.
    """

    def __init__(self, settings: BracketSettings):
        self.settings = settings
        self.sizes = window_sizes(settings.target_bracket_size)

    def partition_pool(self, pool: Pool) -> Tuple[List[Bracket], List[Entrant]]:
        """
        Run the greedy scan over a single pool.

        Args:
            pool: Entrants sharing discipline, division and belt

        Returns:
            (brackets emitted in scan order, outliers in scan order)
        """
        is_adult = pool.division.is_adult
        entrants = sorted(pool.entrants, key=lambda entrant: entrant.weight)

        brackets: List[Bracket] = []
        outliers: List[Entrant] = []

        i = 0
        while i < len(entrants):
            remaining = len(entrants) - i
            match = None

            for size in self.sizes:
                if remaining < size:
                    continue
                candidate = entrants[i:i + size]
                if is_valid_group(candidate, self.settings, is_adult):
                    match = candidate
                    break

            if match is not None:
                brackets.append(self._make_bracket(pool, match, len(brackets) + 1))
                i += len(match)
                continue

            outliers.append(entrants[i])
            i += 1

        logger.debug(
            "Pool %s: %d entrants -> %d brackets, %d outliers",
            pool.name, len(entrants), len(brackets), len(outliers)
        )
        return brackets, outliers

    def _make_bracket(self, pool: Pool, members: List[Entrant], group_number: int) -> Bracket:
        bracket = Bracket(
            id=f"bracket-{_slugify(pool.name)}-{group_number}",
            name=f"{pool.name} (Group {group_number})",
            discipline=pool.discipline,
            division=pool.division,
            competitors=list(members),
        )
        return recalculate_bracket_stats(bracket)


class BracketBuilder:
    """
    Full bracket pipeline: classify, pool, partition, sort.

    Algorithm:
    1. Route entrants with no weight or age straight to outliers
    2. Group the rest into (discipline, division, belt) pools
    3. Partition every pool with the greedy scan
    4. Sort brackets into display order
    """

    def __init__(self, entrants: List[Entrant], settings: BracketSettings):
        self.entrants = entrants
        self.settings = settings
        self.partitioner = BracketPartitioner(settings)

    def build(self) -> ProcessingResult:
        result = ProcessingResult()
        pools, missing_data = build_pools(self.entrants)

        for entrant in missing_data:
            result.add_outlier(entrant, OutlierReason.MISSING_DATA)

        for pool in pools:
            brackets, outliers = self.partitioner.partition_pool(pool)
            result.brackets.extend(brackets)
            for entrant in outliers:
                result.add_outlier(entrant, OutlierReason.NO_VALID_GROUP)

        result.brackets = sort_brackets(result.brackets)

        logger.info(
            "Built %d brackets from %d entrants in %d pools (%d outliers, %d missing data)",
            len(result.brackets), len(self.entrants), len(pools),
            len(result.outliers), len(missing_data)
        )
        return result


def process_entrants(entrants: List[Entrant], settings: BracketSettings) -> ProcessingResult:
    """
    Build a fresh result from the entrant list and settings.

    Pure and deterministic: identical inputs always give identical brackets,
    membership and order.
    """
    return BracketBuilder(entrants, settings).build()
