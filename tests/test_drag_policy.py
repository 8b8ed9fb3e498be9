"""
Test the drag compatibility policy.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.models import Entrant, Bracket, Gender, Belt, Division, Discipline
from app.services.drag_policy import can_drop


def make_entrant(age=25, gender=Gender.MALE, weight=150, discipline=Discipline.GI, belt=Belt.BLUE):
    return Entrant(id="e1", name="Dragged", academy="Test Academy", gender=gender,
                   age=age, weight=weight, belt=belt, discipline=discipline)


def make_bracket(division, discipline=Discipline.GI):
    return Bracket(id="b1", name="Target", discipline=discipline, division=division)


def test_matching_entrant_allowed():
    assert can_drop(make_bracket(Division.ADULT_MALE), make_entrant())


def test_discipline_must_match():
    assert not can_drop(make_bracket(Division.ADULT_MALE), make_entrant(discipline=Discipline.NOGI))
    assert can_drop(make_bracket(Division.ADULT_MALE, Discipline.NOGI), make_entrant(discipline=Discipline.NOGI))


def test_adult_bracket_rejects_young_kids():
    bracket = make_bracket(Division.MASTERS_1_MALE)
    assert not can_drop(bracket, make_entrant(age=12))
    assert can_drop(bracket, make_entrant(age=13))


def test_gendered_division_rejects_other_gender():
    assert not can_drop(make_bracket(Division.ADULT_FEMALE), make_entrant(gender=Gender.MALE))
    assert not can_drop(make_bracket(Division.TEEN_13_15_MALE), make_entrant(age=14, gender=Gender.FEMALE))


def test_coed_and_open_accept_any_gender():
    assert can_drop(make_bracket(Division.KIDS_9_12_COED), make_entrant(age=30, gender=Gender.FEMALE))
    assert can_drop(make_bracket(Division.OPEN), make_entrant(age=8, gender=Gender.FEMALE))


def test_weight_and_belt_are_not_checked():
    bracket = make_bracket(Division.ADULT_MALE)
    bracket.competitors = [make_entrant(weight=130)]
    assert can_drop(bracket, make_entrant(weight=400, belt=Belt.WHITE))
