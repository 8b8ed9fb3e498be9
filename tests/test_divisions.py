"""
Test division classification and display ranks.

Verifies:
1. Every age band boundary maps to the right division
2. The two youngest bands are coed
3. Division ranks run youngest first, with Open last
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app.models import Division, Gender
from app.services.divisions import classify_division, division_rank


@pytest.mark.parametrize("age,gender,expected", [
    (5, Gender.MALE, Division.U8_COED),
    (8, Gender.FEMALE, Division.U8_COED),
    (9, Gender.MALE, Division.KIDS_9_12_COED),
    (12, Gender.FEMALE, Division.KIDS_9_12_COED),
    (13, Gender.MALE, Division.TEEN_13_15_MALE),
    (15, Gender.FEMALE, Division.TEEN_13_15_FEMALE),
    (16, Gender.MALE, Division.ADULT_MALE),
    (34, Gender.FEMALE, Division.ADULT_FEMALE),
    (35, Gender.MALE, Division.MASTERS_1_MALE),
    (39, Gender.FEMALE, Division.MASTERS_1_FEMALE),
    (40, Gender.MALE, Division.MASTERS_2_MALE),
    (44, Gender.FEMALE, Division.MASTERS_2_FEMALE),
    (45, Gender.MALE, Division.MASTERS_3_MALE),
    (70, Gender.FEMALE, Division.MASTERS_3_FEMALE),
])
def test_classify_division_bands(age, gender, expected):
    assert classify_division(age, gender) == expected


def test_coed_bands_ignore_gender():
    """Kids under 13 share a division regardless of gender."""
    for age in (6, 10):
        assert classify_division(age, Gender.MALE) == classify_division(age, Gender.FEMALE)


def test_adult_flags():
    assert Division.ADULT_MALE.is_adult
    assert Division.MASTERS_3_FEMALE.is_adult
    assert not Division.TEEN_13_15_MALE.is_adult
    assert not Division.U8_COED.is_adult
    assert not Division.OPEN.is_adult


def test_division_gender():
    assert Division.ADULT_FEMALE.gender == Gender.FEMALE
    assert Division.TEEN_13_15_MALE.gender == Gender.MALE
    assert Division.KIDS_9_12_COED.gender is None
    assert Division.OPEN.gender is None


def test_division_rank_youngest_first():
    order = [
        Division.U8_COED,
        Division.KIDS_9_12_COED,
        Division.TEEN_13_15_MALE,
        Division.ADULT_MALE,
        Division.MASTERS_1_MALE,
        Division.MASTERS_2_MALE,
        Division.MASTERS_3_MALE,
    ]
    ranks = [division_rank(division) for division in order]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == len(ranks)


def test_open_division_ranks_last():
    assert division_rank(Division.OPEN) > division_rank(Division.MASTERS_3_FEMALE)
