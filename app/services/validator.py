"""
Bracket validation module for the Tournament Bracket Builder.

is_valid_group is the rule the partitioner enforces for automatic brackets.
BracketValidator audits a whole result against the same rules plus the
placement invariants, and produces the text report used by the CLI.
"""

from typing import List
from collections import Counter

from app.models import (
    Entrant, Division, BracketSettings, ProcessingResult, RuleViolation, ResultAudit,
    OutlierReason
)
from app.core.config import (
    MIN_BRACKET_SIZE, MAX_BRACKET_SIZE, ULTRA_HEAVY_THRESHOLD,
    ADULT_MAX_AGE_GAP, KIDS_MAX_AGE_GAP, UNBOUNDED_AGE_GAP
)
from app.core.logging_config import get_logger
from app.services.divisions import classify_division
from app.services.stats import weight_spread, weight_spread_percent, age_gap

logger = get_logger(__name__)

# Float tolerance for comparing stored stats against a fresh computation
STATS_TOLERANCE = 1e-9


def allowed_age_gap(settings: BracketSettings, is_adult_division: bool) -> int:
    if is_adult_division:
        return UNBOUNDED_AGE_GAP if settings.adults_ignore_age_gap else ADULT_MAX_AGE_GAP
    return KIDS_MAX_AGE_GAP


def max_weight_diff_percent(settings: BracketSettings, is_adult_division: bool) -> float:
    if is_adult_division:
        return settings.adults_max_weight_diff_percent
    return settings.kids_max_weight_diff_percent


def is_valid_group(group: List[Entrant], settings: BracketSettings, is_adult_division: bool) -> bool:
    """
    Decide whether a candidate group may form an automatic bracket.

    The weight rule requires both the percent cap and the absolute cap to hold,
    unless the ultra-heavyweight waiver applies to the lightest member.

    Args:
        group: Candidate entrants
        settings: Active bracket settings
        is_adult_division: Whether the group's division uses adult rules

    Returns:
        True if the group satisfies size, weight and age rules
    """
    if len(group) < MIN_BRACKET_SIZE:
        return False

    lightest = min(entrant.weight for entrant in group)
    waived = settings.ultra_heavy_ignore and lightest >= ULTRA_HEAVY_THRESHOLD

    if not waived:
        if lightest <= 0:
            return False
        if weight_spread_percent(group) > max_weight_diff_percent(settings, is_adult_division):
            return False
        if weight_spread(group) > settings.max_weight_diff_absolute_cap:
            return False

    return age_gap(group) <= allowed_age_gap(settings, is_adult_division)


class BracketValidator:
    """
    Audits a processing result against the placement invariants.
    Hard violations break an invariant; warnings flag manual brackets that
    no longer satisfy the automatic rules.
    """

    def __init__(self, settings: BracketSettings):
        self.settings = settings

    def validate_result(self, result: ProcessingResult, entrants: List[Entrant]) -> ResultAudit:
        """
        Validate a complete result.

        Args:
            result: The result to audit
            entrants: The full entrant list the result was built from

        Returns:
            ResultAudit with all violations found
        """
        audit = ResultAudit()

        self._check_completeness(result, entrants, audit)
        self._check_missing_data_outliers(result, audit)
        self._check_bracket_sizes(result, audit)
        self._check_bracket_rules(result, audit)
        self._check_stats_consistency(result, audit)

        logger.info(
            "Audit complete: valid=%s, %d violations, %d warnings",
            audit.is_valid, len(audit.violations), len(audit.warnings)
        )
        return audit

    def _check_completeness(self, result: ProcessingResult, entrants: List[Entrant], audit: ResultAudit):
        """Every entrant appears exactly once across brackets and outliers."""
        appearances = Counter(entrant.id for entrant in result.outliers)
        for bracket in result.brackets:
            appearances.update(entrant.id for entrant in bracket.competitors)

        for entrant in entrants:
            count = appearances.get(entrant.id, 0)
            if count != 1:
                audit.add_violation(RuleViolation(
                    rule="placement_count",
                    severity="hard",
                    description=f"{entrant.name} ({entrant.id}) appears {count} times",
                    entrant_ids=[entrant.id]
                ))

    def _check_missing_data_outliers(self, result: ProcessingResult, audit: ResultAudit):
        for bracket in result.brackets:
            for entrant in bracket.competitors:
                if entrant.has_missing_data and not bracket.is_manual:
                    audit.add_violation(RuleViolation(
                        rule="missing_data_in_bracket",
                        severity="hard",
                        description=f"{entrant.name} has no weight or age but is in {bracket.name}",
                        bracket_id=bracket.id,
                        entrant_ids=[entrant.id]
                    ))

    def _check_bracket_sizes(self, result: ProcessingResult, audit: ResultAudit):
        for bracket in result.brackets:
            size = len(bracket.competitors)
            if size > MAX_BRACKET_SIZE:
                audit.add_violation(RuleViolation(
                    rule="bracket_over_capacity",
                    severity="hard",
                    description=f"{bracket.name} has {size} members (max {MAX_BRACKET_SIZE})",
                    bracket_id=bracket.id
                ))
            elif size < MIN_BRACKET_SIZE and not bracket.is_manual:
                audit.add_violation(RuleViolation(
                    rule="bracket_under_minimum",
                    severity="hard",
                    description=f"{bracket.name} has {size} members (min {MIN_BRACKET_SIZE})",
                    bracket_id=bracket.id
                ))

    def _check_bracket_rules(self, result: ProcessingResult, audit: ResultAudit):
        """Automatic brackets must pass the group rules; manual ones only warn."""
        for bracket in result.brackets:
            if len(bracket.competitors) < MIN_BRACKET_SIZE:
                continue
            is_adult = bracket.division.is_adult
            if bracket.division == Division.OPEN:
                # Open brackets carry no age band; judge by the lightest member
                is_adult = classify_division(
                    bracket.competitors[0].age, bracket.competitors[0].gender
                ).is_adult
            if is_valid_group(bracket.competitors, self.settings, is_adult):
                continue
            audit.add_violation(RuleViolation(
                rule="bracket_rules",
                severity="soft" if bracket.is_manual else "hard",
                description=(
                    f"{bracket.name} breaks the weight or age rules "
                    f"(spread {bracket.weight_spread_percent:.1f}%, age gap {bracket.age_gap})"
                ),
                bracket_id=bracket.id,
                entrant_ids=[entrant.id for entrant in bracket.competitors]
            ))

    def _check_stats_consistency(self, result: ProcessingResult, audit: ResultAudit):
        for bracket in result.brackets:
            members = bracket.competitors
            expected_avg = sum(e.weight for e in members) / len(members) if members else 0.0
            stale = (
                abs(bracket.avg_weight - expected_avg) > STATS_TOLERANCE
                or abs(bracket.weight_spread_percent - weight_spread_percent(members)) > STATS_TOLERANCE
                or bracket.age_gap != age_gap(members)
                or [e.weight for e in members] != sorted(e.weight for e in members)
            )
            if stale:
                audit.add_violation(RuleViolation(
                    rule="stale_stats",
                    severity="hard",
                    description=f"{bracket.name} has derived stats that do not match its members",
                    bracket_id=bracket.id
                ))

    def generate_result_report(self, result: ProcessingResult) -> str:
        """
        Generate a readable report of the brackets and outliers.

        Args:
            result: The result to report on

        Returns:
            Formatted report string
        """
        report = []
        report.append("=" * 80)
        report.append("BRACKET REPORT")
        report.append("=" * 80)
        report.append(f"Brackets: {len(result.brackets)}")
        report.append(f"Outliers: {len(result.outliers)}")
        report.append("")

        for bracket in result.brackets:
            report.append(
                f"{bracket.name}  [{len(bracket.competitors)}]  "
                f"avg {bracket.avg_weight:.1f}, spread {bracket.weight_spread_percent:.1f}%, "
                f"age gap {bracket.age_gap}"
            )
            for entrant in bracket.competitors:
                report.append(
                    f"    {entrant.name:<24} {entrant.academy:<16} "
                    f"{entrant.age:>3}y {entrant.weight:>7.1f}"
                )
        report.append("")

        if result.outliers:
            report.append("Outliers:")
            for entrant in result.outliers:
                reason = result.outlier_reasons.get(entrant.id, OutlierReason.NO_VALID_GROUP)
                report.append(
                    f"    {entrant.name:<24} {entrant.belt.value:<12} "
                    f"{entrant.age:>3}y {entrant.weight:>7.1f}  ({reason.value})"
                )

        report.append("=" * 80)

        return "\n".join(report)
