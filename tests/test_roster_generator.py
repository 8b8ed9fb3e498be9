"""
Test the demo roster generator.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.models import Belt, Discipline
from app.services.roster_generator import generate_roster, KIDS_BELTS, NOGI_LEVELS


def test_same_seed_same_roster():
    assert [e.to_dict() for e in generate_roster(50, seed=8)] == [e.to_dict() for e in generate_roster(50, seed=8)]


def test_different_seed_different_roster():
    assert [e.to_dict() for e in generate_roster(50, seed=1)] != [e.to_dict() for e in generate_roster(50, seed=2)]


def test_ids_are_unique_and_seeded():
    roster = generate_roster(30, seed=6)
    assert len({e.id for e in roster}) == 30
    assert roster[0].id == "comp-6-0"


def test_generated_entrants_are_complete():
    for entrant in generate_roster(200, seed=0):
        assert not entrant.has_missing_data
        if entrant.age <= 15:
            assert entrant.belt in KIDS_BELTS
        elif entrant.discipline == Discipline.NOGI:
            assert entrant.belt in set(NOGI_LEVELS.values())
        else:
            assert entrant.belt in {Belt.WHITE, Belt.BLUE, Belt.PURPLE, Belt.BROWN, Belt.BLACK}
        if entrant.belt == Belt.BLACK:
            assert entrant.age >= 25
