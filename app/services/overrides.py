"""
Manual override engine.

Applies operator commands (move, rename, create) directly to a materialized
ProcessingResult without re-running the partitioner. Manual placement is
allowed to produce brackets that would fail is_valid_group.

Not thread-safe on its own; callers serialize access (see workspace.py).
"""

from typing import Optional, Tuple

from app.models import (
    Entrant, Bracket, Discipline, Division, ProcessingResult, OutlierReason, MoveOutcome
)
from app.core.config import (
    MAX_BRACKET_SIZE, MANUAL_BRACKET_DIVISION, OUTLIERS_TARGET, NEW_BRACKET_TARGET
)
from app.core.logging_config import get_logger
from app.services.divisions import classify_division
from app.services.stats import recalculate_bracket_stats, weight_spread

logger = get_logger(__name__)


class OverrideEngine:
    """
    Command handler over one result snapshot.
    """

    def __init__(self, result: ProcessingResult):
        self.result = result
        self._manual_counter = 0
        self.edit_count = 0

    def move(self, entrant_id: str, target: Optional[str] = None) -> MoveOutcome:
        """
        Move an entrant to outliers, a new bracket, or an existing bracket.

        Args:
            entrant_id: Entrant to move
            target: "outliers" or None, "new", or an existing bracket id

        Returns:
            MoveOutcome describing what happened; moved=False for unknown entrants
        """
        entrant, source = self._detach(entrant_id)
        if entrant is None:
            logger.warning("Ignoring move of unknown entrant %s", entrant_id)
            return MoveOutcome(entrant_id=entrant_id, moved=False)

        self.edit_count += 1
        outcome = MoveOutcome(entrant_id=entrant_id, moved=True, source=source)

        if target is None or target == OUTLIERS_TARGET:
            self.result.add_outlier(entrant, OutlierReason.MANUAL)
            outcome.target = OUTLIERS_TARGET
            return outcome

        if target == NEW_BRACKET_TARGET:
            bracket = self._seed_bracket(entrant)
            outcome.target = bracket.id
            return outcome

        bracket = self.result.get_bracket(target)
        if bracket is None:
            logger.warning("Bracket %s not found; sending %s to outliers", target, entrant_id)
            self.result.add_outlier(entrant, OutlierReason.MANUAL)
            outcome.target = OUTLIERS_TARGET
            return outcome

        if bracket.is_full:
            evicted = self._insert_with_eviction(bracket, entrant)
            outcome.evicted_id = evicted.id
        else:
            bracket.competitors.append(entrant)

        bracket.is_manual = True
        recalculate_bracket_stats(bracket)
        outcome.target = bracket.id
        return outcome

    def rename(self, bracket_id: str, new_name: str) -> bool:
        bracket = self.result.get_bracket(bracket_id)
        if bracket is None:
            logger.warning("Ignoring rename of unknown bracket %s", bracket_id)
            return False
        bracket.name = new_name
        self.edit_count += 1
        return True

    def create_empty_bracket(self) -> Bracket:
        """Insert an empty bracket with neutral discipline/division at the front."""
        bracket = Bracket(
            id=self._next_manual_id(),
            name="New Bracket",
            discipline=Discipline.GI,
            division=Division(MANUAL_BRACKET_DIVISION),
            is_manual=True,
        )
        self.result.brackets.insert(0, bracket)
        self.edit_count += 1
        return bracket

    def _detach(self, entrant_id: str) -> Tuple[Optional[Entrant], Optional[str]]:
        """Remove an entrant from wherever it sits. Outliers are searched first."""
        for index, entrant in enumerate(self.result.outliers):
            if entrant.id == entrant_id:
                del self.result.outliers[index]
                self.result.outlier_reasons.pop(entrant_id, None)
                return entrant, OUTLIERS_TARGET

        for bracket in self.result.brackets:
            for index, entrant in enumerate(bracket.competitors):
                if entrant.id == entrant_id:
                    del bracket.competitors[index]
                    bracket.is_manual = True
                    recalculate_bracket_stats(bracket)
                    return entrant, bracket.id

        return None, None

    def _insert_with_eviction(self, bracket: Bracket, entrant: Entrant) -> Entrant:
        """
        Add an entrant to a full bracket and bump one member to outliers.

        Of the six candidates sorted by weight, keep whichever five (lightest
        or heaviest) has the smaller spread. Ties keep the lightest five.
        """
        candidates = sorted(bracket.competitors + [entrant], key=lambda e: e.weight)
        light = candidates[:MAX_BRACKET_SIZE]
        heavy = candidates[-MAX_BRACKET_SIZE:]

        if weight_spread(heavy) < weight_spread(light):
            kept, evicted = heavy, candidates[0]
        else:
            kept, evicted = light, candidates[-1]

        bracket.competitors = kept
        self.result.add_outlier(evicted, OutlierReason.EVICTED)
        logger.info("Bracket %s at capacity; evicted %s (%s)", bracket.id, evicted.name, evicted.id)
        return evicted

    def _seed_bracket(self, entrant: Entrant) -> Bracket:
        division = classify_division(entrant.age, entrant.gender)
        bracket = Bracket(
            id=self._next_manual_id(),
            name=f"{entrant.discipline.value} {division.value} {entrant.belt.value} ({entrant.name})",
            discipline=entrant.discipline,
            division=division,
            competitors=[entrant],
            is_manual=True,
        )
        # Stats must match membership, so a seeded bracket reports its one member
        # rather than zeroed values
        recalculate_bracket_stats(bracket)
        self.result.brackets.insert(0, bracket)
        return bracket

    def _next_manual_id(self) -> str:
        while True:
            self._manual_counter += 1
            bracket_id = f"manual-{self._manual_counter}"
            if self.result.get_bracket(bracket_id) is None:
                return bracket_id
