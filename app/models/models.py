"""
Data models for the Tournament Bracket Builder.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any
from enum import Enum

from app.core.config import (
    DEFAULT_TARGET_BRACKET_SIZE,
    DEFAULT_KIDS_MAX_WEIGHT_DIFF_PERCENT,
    DEFAULT_ADULTS_MAX_WEIGHT_DIFF_PERCENT,
    DEFAULT_ADULTS_IGNORE_AGE_GAP,
    DEFAULT_MAX_WEIGHT_DIFF_ABSOLUTE_CAP,
    DEFAULT_ULTRA_HEAVY_IGNORE,
    ADULT_DIVISION_PREFIXES,
    MAX_BRACKET_SIZE,
)


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"

class Discipline(Enum):
    GI = "Gi"
    NOGI = "No-Gi"

class Belt(Enum):
    # Kids belts
    WHITE = "White"
    GREY = "Grey"
    YELLOW = "Yellow"
    ORANGE = "Orange"
    GREEN = "Green"
    # Adult belts
    BLUE = "Blue"
    PURPLE = "Purple"
    BROWN = "Brown"
    BLACK = "Black"
    # No-Gi skill levels
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

class Division(Enum):
    U8_COED = "8U Coed"
    KIDS_9_12_COED = "9-12 Coed"
    TEEN_13_15_MALE = "13-15 Male"
    TEEN_13_15_FEMALE = "13-15 Female"
    ADULT_MALE = "Adult (16+) Male"
    ADULT_FEMALE = "Adult (16+) Female"
    MASTERS_1_MALE = "Masters I (35+) Male"
    MASTERS_1_FEMALE = "Masters I (35+) Female"
    MASTERS_2_MALE = "Masters II (40+) Male"
    MASTERS_2_FEMALE = "Masters II (40+) Female"
    MASTERS_3_MALE = "Masters III (45+) Male"
    MASTERS_3_FEMALE = "Masters III (45+) Female"
    OPEN = "Open"  # Neutral division for manually created brackets

    @property
    def is_adult(self) -> bool:
        return self.value.startswith(ADULT_DIVISION_PREFIXES)

    @property
    def gender(self) -> Optional[Gender]:
        """Gender encoded in the label, or None for coed/open divisions."""
        for gender in Gender:
            if self.value.endswith(" " + gender.value):
                return gender
        return None

class OutlierReason(Enum):
    MISSING_DATA = "missing_data"      # weight or age is zero
    NO_VALID_GROUP = "no_valid_group"  # partitioner found no valid window
    MANUAL = "manual"                  # operator moved the entrant out
    EVICTED = "evicted"                # bumped from a full bracket


@dataclass
class Entrant:
    id: str
    name: str
    academy: str
    gender: Gender
    age: int
    weight: float
    belt: Belt
    discipline: Discipline = Discipline.GI
    email: str = ""
    phone: str = ""
    notes: str = ""

    @property
    def has_missing_data(self) -> bool:
        return self.weight == 0 or self.age == 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["gender"] = self.gender.value
        data["belt"] = self.belt.value
        data["discipline"] = self.discipline.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entrant":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            academy=data.get("academy", ""),
            gender=Gender(data["gender"]),
            age=int(data.get("age") or 0),
            weight=float(data.get("weight") or 0),
            belt=Belt(data["belt"]),
            discipline=Discipline(data.get("discipline", Discipline.GI.value)),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            notes=data.get("notes", ""),
        )

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Entrant):
            return self.id == other.id
        return False


@dataclass
class Bracket:
    id: str
    name: str
    discipline: Discipline
    division: Division
    competitors: List[Entrant] = field(default_factory=list)
    avg_weight: float = 0.0
    weight_spread_percent: float = 0.0
    age_gap: int = 0
    is_manual: bool = False

    @property
    def is_full(self) -> bool:
        return len(self.competitors) >= MAX_BRACKET_SIZE

    def find(self, entrant_id: str) -> Optional[Entrant]:
        for entrant in self.competitors:
            if entrant.id == entrant_id:
                return entrant
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "discipline": self.discipline.value,
            "division": self.division.value,
            "competitors": [entrant.to_dict() for entrant in self.competitors],
            "avg_weight": self.avg_weight,
            "weight_spread_percent": self.weight_spread_percent,
            "age_gap": self.age_gap,
            "is_manual": self.is_manual,
        }


@dataclass
class BracketSettings:
    """Configuration record consumed by the bracket pipeline."""
    target_bracket_size: int = DEFAULT_TARGET_BRACKET_SIZE
    kids_max_weight_diff_percent: float = DEFAULT_KIDS_MAX_WEIGHT_DIFF_PERCENT
    adults_max_weight_diff_percent: float = DEFAULT_ADULTS_MAX_WEIGHT_DIFF_PERCENT
    adults_ignore_age_gap: bool = DEFAULT_ADULTS_IGNORE_AGE_GAP
    max_weight_diff_absolute_cap: float = DEFAULT_MAX_WEIGHT_DIFF_ABSOLUTE_CAP
    ultra_heavy_ignore: bool = DEFAULT_ULTRA_HEAVY_IGNORE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketSettings":
        known = {key: value for key, value in data.items() if key in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class ProcessingResult:
    brackets: List[Bracket] = field(default_factory=list)
    outliers: List[Entrant] = field(default_factory=list)
    outlier_reasons: Dict[str, OutlierReason] = field(default_factory=dict)

    def add_outlier(self, entrant: Entrant, reason: OutlierReason):
        self.outliers.append(entrant)
        self.outlier_reasons[entrant.id] = reason

    def get_bracket(self, bracket_id: str) -> Optional[Bracket]:
        for bracket in self.brackets:
            if bracket.id == bracket_id:
                return bracket
        return None

    def locate(self, entrant_id: str) -> Optional[str]:
        """
        Find where an entrant currently sits.

        Returns:
            "outliers", the id of the containing bracket, or None if unknown
        """
        if any(entrant.id == entrant_id for entrant in self.outliers):
            return "outliers"
        for bracket in self.brackets:
            if bracket.find(entrant_id) is not None:
                return bracket.id
        return None

    def placed_count(self) -> int:
        return sum(len(bracket.competitors) for bracket in self.brackets) + len(self.outliers)

    def get_summary(self) -> str:
        summary = f"Brackets: {len(self.brackets)}\n"
        summary += f"Entrants Placed: {sum(len(b.competitors) for b in self.brackets)}\n"
        summary += f"Outliers: {len(self.outliers)}\n"
        return summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brackets": [bracket.to_dict() for bracket in self.brackets],
            "outliers": [entrant.to_dict() for entrant in self.outliers],
            "outlier_reasons": {
                entrant_id: reason.value for entrant_id, reason in self.outlier_reasons.items()
            },
        }


@dataclass
class MoveOutcome:
    entrant_id: str
    moved: bool
    source: Optional[str] = None
    target: Optional[str] = None
    evicted_id: Optional[str] = None


@dataclass
class RuleViolation:
    rule: str
    severity: str
    description: str
    bracket_id: Optional[str] = None
    entrant_ids: List[str] = field(default_factory=list)


@dataclass
class ResultAudit:
    is_valid: bool = True
    violations: List[RuleViolation] = field(default_factory=list)
    warnings: List[RuleViolation] = field(default_factory=list)

    def add_violation(self, violation: RuleViolation):
        if violation.severity == 'hard':
            self.violations.append(violation)
            self.is_valid = False
        else:
            self.warnings.append(violation)

    def get_summary(self) -> str:
        summary = f"Result Valid: {self.is_valid}\n"
        summary += f"Hard Violations: {len(self.violations)}\n"
        summary += f"Warnings: {len(self.warnings)}\n"
        return summary
