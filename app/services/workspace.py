"""
Bracket workspace.

Owns the entrant list, the active settings and the current result snapshot.
Any change to entrants or settings rebuilds the result from scratch and
discards manual overrides; override commands act on the snapshot only.
All access goes through one lock so a single writer touches the snapshot.
"""

import threading
from dataclasses import replace
from typing import List, Optional, Dict, Any, Callable, Tuple

from app.models import Entrant, BracketSettings, ProcessingResult, MoveOutcome, Bracket, ResultAudit
from app.core.logging_config import get_logger
from app.services.partitioner import process_entrants
from app.services.overrides import OverrideEngine
from app.services.drag_policy import can_drop
from app.services.validator import BracketValidator
from app.services.advisory import build_outlier_payload, request_outlier_advice
from app.services.roster_generator import generate_roster

logger = get_logger(__name__)


class EntrantNotFoundError(KeyError):
    """Raised when a workspace command names an entrant that does not exist."""


class BracketNotFoundError(KeyError):
    """Raised when a workspace query names a bracket that does not exist."""


class BracketWorkspace:
    """
    Single-writer holder of the tournament state.
    """

    def __init__(self, entrants: Optional[List[Entrant]] = None,
                 settings: Optional[BracketSettings] = None):
        self._lock = threading.RLock()
        self.entrants: List[Entrant] = list(entrants or [])
        self.settings = settings or BracketSettings()
        self.revision = 0
        self._engine = OverrideEngine(ProcessingResult())
        self._reprocess()

    @property
    def result(self) -> ProcessingResult:
        return self._engine.result

    def _reprocess(self):
        """Rebuild the result. Manual edits on the old snapshot are discarded."""
        discarded = self._engine.edit_count
        self._engine = OverrideEngine(process_entrants(self.entrants, self.settings))
        self.revision += 1
        if discarded:
            logger.info("Reprocessed (revision %d); discarded %d manual edits", self.revision, discarded)
        else:
            logger.info("Reprocessed (revision %d)", self.revision)

    # Data and settings changes: always a full rebuild

    def set_entrants(self, entrants: List[Entrant]):
        with self._lock:
            self.entrants = list(entrants)
            self._reprocess()

    def set_settings(self, settings: BracketSettings):
        with self._lock:
            self.settings = settings
            self._reprocess()

    def generate_entrants(self, count: int, seed: int = 0) -> List[Entrant]:
        entrants = generate_roster(count, seed)
        self.set_entrants(entrants)
        return entrants

    def get_entrant(self, entrant_id: str) -> Entrant:
        with self._lock:
            for entrant in self.entrants:
                if entrant.id == entrant_id:
                    return entrant
        raise EntrantNotFoundError(entrant_id)

    def update_entrant(self, entrant_id: str, changes: Dict[str, Any]) -> Entrant:
        """
        Edit an entrant's attributes and rebuild. The id cannot be changed.

        Args:
            entrant_id: Entrant to edit
            changes: Field name to new value (already typed)

        Returns:
            The updated entrant
        """
        with self._lock:
            index = self._index_of(entrant_id)
            changes = {key: value for key, value in changes.items() if key != "id"}
            updated = replace(self.entrants[index], **changes)
            self.entrants[index] = updated
            self._reprocess()
            return updated

    def duplicate_entrant(self, entrant_id: str) -> Entrant:
        """
        Clone an entrant under a new id, then rebuild.

        The clone is placed right after the original in the entrant list and
        goes wherever the partitioner puts it; it is not pinned to a bracket.
        """
        with self._lock:
            index = self._index_of(entrant_id)
            original = self.entrants[index]
            clone = replace(original, id=self._clone_id(original.id), name=f"{original.name} (Copy)")
            self.entrants.insert(index + 1, clone)
            self._reprocess()
            return clone

    def _index_of(self, entrant_id: str) -> int:
        for index, entrant in enumerate(self.entrants):
            if entrant.id == entrant_id:
                return index
        raise EntrantNotFoundError(entrant_id)

    def _clone_id(self, base_id: str) -> str:
        existing = {entrant.id for entrant in self.entrants}
        candidate = f"{base_id}-copy"
        n = 2
        while candidate in existing:
            candidate = f"{base_id}-copy-{n}"
            n += 1
        return candidate

    # Manual overrides: act on the current snapshot only

    def move(self, entrant_id: str, target: Optional[str] = None) -> MoveOutcome:
        with self._lock:
            return self._engine.move(entrant_id, target)

    def rename(self, bracket_id: str, new_name: str) -> bool:
        with self._lock:
            return self._engine.rename(bracket_id, new_name)

    def create_empty_bracket(self) -> Bracket:
        with self._lock:
            return self._engine.create_empty_bracket()

    def can_drop(self, bracket_id: str, entrant_id: str) -> bool:
        with self._lock:
            bracket = self.result.get_bracket(bracket_id)
            if bracket is None:
                raise BracketNotFoundError(bracket_id)
            return can_drop(bracket, self.get_entrant(entrant_id))

    # Read side

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            data = self.result.to_dict()
            data["revision"] = self.revision
            data["total_entrants"] = len(self.entrants)
            return data

    def roster_payload(self) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Serializable copy of the roster and settings, for off-process builds."""
        with self._lock:
            return [entrant.to_dict() for entrant in self.entrants], self.settings.to_dict()

    def audit(self) -> ResultAudit:
        with self._lock:
            return BracketValidator(self.settings).validate_result(self.result, self.entrants)

    def outlier_payload(self) -> List[Dict[str, Any]]:
        with self._lock:
            return build_outlier_payload(self.result.outliers)

    def outlier_advice(self, advisor: Optional[Callable[[List[Dict[str, Any]]], str]] = None) -> str:
        # Copy under the lock, call the collaborator outside it
        with self._lock:
            outliers = list(self.result.outliers)
        return request_outlier_advice(outliers, advisor)
