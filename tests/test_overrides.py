"""
Test manual overrides on a built result.

Verifies:
1. Moves to outliers, to a new bracket and between brackets
2. Dropping onto a full bracket evicts whichever end keeps the tighter five
3. Unknown entrants and brackets leave the result consistent
4. Stats stay in sync with membership after every edit
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app.models import (
    Entrant, Bracket, BracketSettings, ProcessingResult, Gender, Belt, Division, Discipline,
    OutlierReason
)
from app.services.overrides import OverrideEngine
from app.services.stats import recalculate_bracket_stats
from app.services.validator import BracketValidator
from app.services.partitioner import process_entrants
from app.services.roster_generator import generate_roster


def make_entrant(entrant_id, weight, age=25, gender=Gender.MALE, belt=Belt.BLUE, discipline=Discipline.GI):
    return Entrant(
        id=entrant_id, name=f"Entrant {entrant_id}", academy="Test Academy",
        gender=gender, age=age, weight=weight, belt=belt, discipline=discipline,
    )


def full_bracket_result(weights, incoming_weight):
    """A result with one full bracket and one outlier waiting to be dropped in."""
    members = [make_entrant(f"m{i}", weight) for i, weight in enumerate(weights)]
    bracket = recalculate_bracket_stats(Bracket(
        id="b1", name="Gi Adult (16+) Male Blue (Group 1)", discipline=Discipline.GI,
        division=Division.ADULT_MALE, competitors=members,
    ))
    result = ProcessingResult(brackets=[bracket])
    incoming = make_entrant("incoming", incoming_weight)
    result.add_outlier(incoming, OutlierReason.NO_VALID_GROUP)
    return result, members + [incoming]


def assert_consistent(result, entrants):
    audit = BracketValidator(BracketSettings()).validate_result(result, entrants)
    hard = [v.rule for v in audit.violations]
    assert "placement_count" not in hard
    assert "stale_stats" not in hard
    assert "bracket_over_capacity" not in hard


def test_drop_heavy_entrant_on_full_bracket_evicts_it():
    result, entrants = full_bracket_result([150, 151, 152, 153, 154], 200)
    assert result.get_bracket("b1").is_full
    outcome = OverrideEngine(result).move("incoming", "b1")

    bracket = result.get_bracket("b1")
    assert outcome.moved
    assert outcome.source == "outliers"
    assert outcome.evicted_id == "incoming"
    assert [e.weight for e in bracket.competitors] == [150, 151, 152, 153, 154]
    assert result.locate("incoming") == "outliers"
    assert result.outlier_reasons["incoming"] == OutlierReason.EVICTED
    assert bracket.avg_weight == pytest.approx(152.0)
    assert_consistent(result, entrants)


def test_drop_on_full_bracket_evicts_light_end():
    result, entrants = full_bracket_result([100, 150, 151, 152, 153], 154)
    outcome = OverrideEngine(result).move("incoming", "b1")

    assert outcome.evicted_id == "m0"
    assert [e.weight for e in result.get_bracket("b1").competitors] == [150, 151, 152, 153, 154]
    assert result.locate("m0") == "outliers"
    assert_consistent(result, entrants)


def test_eviction_tie_keeps_lightest_five():
    result, _ = full_bracket_result([100, 101, 102, 103, 104], 105)
    outcome = OverrideEngine(result).move("incoming", "b1")
    assert outcome.evicted_id == "incoming"


def test_move_into_bracket_with_room():
    result, entrants = full_bracket_result([150, 151, 152, 153], 149)
    assert not result.get_bracket("b1").is_full
    outcome = OverrideEngine(result).move("incoming", "b1")

    bracket = result.get_bracket("b1")
    assert outcome.evicted_id is None
    assert [e.weight for e in bracket.competitors] == [149, 150, 151, 152, 153]
    assert bracket.is_manual
    assert "incoming" not in result.outlier_reasons
    assert_consistent(result, entrants)


def test_move_to_outliers_updates_source():
    result, entrants = full_bracket_result([150, 151, 152, 153, 154], 200)
    outcome = OverrideEngine(result).move("m4")

    bracket = result.get_bracket("b1")
    assert outcome.source == "b1"
    assert outcome.target == "outliers"
    assert len(bracket.competitors) == 4
    assert bracket.avg_weight == pytest.approx(151.5)
    assert bracket.is_manual
    assert result.outlier_reasons["m4"] == OutlierReason.MANUAL
    assert_consistent(result, entrants)


def test_move_to_new_bracket():
    result, entrants = full_bracket_result([150, 151, 152, 153, 154], 200)
    outcome = OverrideEngine(result).move("incoming", "new")

    new_bracket = result.brackets[0]
    assert outcome.target == new_bracket.id
    assert new_bracket.id.startswith("manual-")
    assert new_bracket.is_manual
    assert new_bracket.division == Division.ADULT_MALE
    assert new_bracket.name == "Gi Adult (16+) Male Blue (Entrant incoming)"
    assert [e.id for e in new_bracket.competitors] == ["incoming"]
    assert new_bracket.avg_weight == 200
    assert_consistent(result, entrants)


def test_unknown_entrant_is_a_no_op():
    result, _ = full_bracket_result([150, 151, 152, 153, 154], 200)
    before = result.to_dict()
    engine = OverrideEngine(result)

    outcome = engine.move("nobody", "b1")

    assert not outcome.moved
    assert result.to_dict() == before
    assert engine.edit_count == 0


def test_unknown_target_bracket_sends_to_outliers():
    result, entrants = full_bracket_result([150, 151, 152, 153, 154], 200)
    outcome = OverrideEngine(result).move("m0", "missing-bracket")

    assert outcome.target == "outliers"
    assert result.locate("m0") == "outliers"
    assert_consistent(result, entrants)


def test_move_back_out_of_outliers_clears_reason():
    result, entrants = full_bracket_result([150, 151, 152, 153, 154], 200)
    engine = OverrideEngine(result)
    engine.move("m2")
    engine.move("m2", "b1")

    assert "m2" not in result.outlier_reasons
    assert result.locate("m2") == "b1"
    assert_consistent(result, entrants)


def test_rename():
    result, _ = full_bracket_result([150, 151, 152], 200)
    engine = OverrideEngine(result)
    assert engine.rename("b1", "Finals")
    assert result.get_bracket("b1").name == "Finals"
    assert not engine.rename("nope", "Finals")


def test_create_empty_bracket_goes_first():
    result, entrants = full_bracket_result([150, 151, 152], 200)
    engine = OverrideEngine(result)
    first = engine.create_empty_bracket()
    second = engine.create_empty_bracket()

    assert result.brackets[0] is second
    assert result.brackets[1] is first
    assert first.id != second.id
    assert second.competitors == []
    assert second.division == Division.OPEN
    assert second.discipline == Discipline.GI
    assert second.avg_weight == 0.0
    assert_consistent(result, entrants)


def test_fill_empty_bracket():
    result, entrants = full_bracket_result([150, 151, 152], 200)
    engine = OverrideEngine(result)
    bracket = engine.create_empty_bracket()
    engine.move("incoming", bracket.id)
    engine.move("m0", bracket.id)

    assert [e.weight for e in bracket.competitors] == [150, 200]
    assert bracket.avg_weight == pytest.approx(175.0)
    assert_consistent(result, entrants)


def test_many_edits_on_generated_result_keep_invariants():
    entrants = generate_roster(80, seed=2)
    result = process_entrants(entrants, BracketSettings())
    engine = OverrideEngine(result)
    bracket_ids = [b.id for b in result.brackets]

    for i, entrant in enumerate(entrants):
        if i % 4 == 0:
            engine.move(entrant.id)
        elif i % 4 == 1:
            engine.move(entrant.id, bracket_ids[i % len(bracket_ids)])
        elif i % 4 == 2:
            engine.move(entrant.id, "new")

    assert result.placed_count() == len(entrants)
    assert all(len(b.competitors) <= 5 for b in result.brackets)
    assert_consistent(result, entrants)
