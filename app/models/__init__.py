"""
Data models for the bracket builder.
"""

from .models import (
    Gender,
    Discipline,
    Belt,
    Division,
    OutlierReason,
    Entrant,
    Bracket,
    BracketSettings,
    ProcessingResult,
    MoveOutcome,
    RuleViolation,
    ResultAudit
)

__all__ = [
    "Gender",
    "Discipline",
    "Belt",
    "Division",
    "OutlierReason",
    "Entrant",
    "Bracket",
    "BracketSettings",
    "ProcessingResult",
    "MoveOutcome",
    "RuleViolation",
    "ResultAudit"
]
