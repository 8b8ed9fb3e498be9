"""
Demo roster generator.
Produces a realistic-looking entrant list from a seed, for demos and tests.
"""

import random
from typing import List

from app.models import Entrant, Gender, Belt, Discipline
from app.core.config import GENERATOR_FIRST_NAMES, GENERATOR_ACADEMIES

KIDS_BELTS = [Belt.WHITE, Belt.GREY, Belt.YELLOW, Belt.ORANGE, Belt.GREEN]
# No-Gi events use skill levels instead of belt colours
NOGI_LEVELS = {
    Belt.WHITE: Belt.BEGINNER,
    Belt.BLUE: Belt.INTERMEDIATE,
    Belt.PURPLE: Belt.ADVANCED,
    Belt.BROWN: Belt.EXPERT,
    Belt.BLACK: Belt.EXPERT,
}


def _adult_belt(rng: random.Random) -> Belt:
    # Weighted toward lower belts
    roll = rng.random()
    if roll > 0.95:
        return Belt.BLACK
    if roll > 0.85:
        return Belt.BROWN
    if roll > 0.7:
        return Belt.PURPLE
    if roll > 0.4:
        return Belt.BLUE
    return Belt.WHITE


def generate_roster(count: int, seed: int = 0) -> List[Entrant]:
    """
    Generate a deterministic demo roster.

    Args:
        count: Number of entrants
        seed: Random seed; the same seed always yields the same roster

    Returns:
        List of entrants with ids comp-{seed}-{i}
    """
    rng = random.Random(seed)
    entrants = []

    for i in range(count):
        gender = Gender.MALE if rng.random() > 0.3 else Gender.FEMALE
        discipline = Discipline.NOGI if rng.random() > 0.6 else Discipline.GI
        is_kid = rng.random() < 0.25

        if is_kid:
            age = rng.randint(5, 15)
            weight = rng.randint(40 + age * 3, 60 + age * 6)
            belt = rng.choice(KIDS_BELTS)
        else:
            belt = _adult_belt(rng)
            min_age = 25 if belt == Belt.BLACK else 16
            age = rng.randint(min_age, min_age + 30)
            base_weight = 140 if gender == Gender.MALE else 110
            weight = rng.randint(base_weight, base_weight + 100)

        if discipline == Discipline.NOGI and not is_kid:
            belt = NOGI_LEVELS[belt]

        entrants.append(Entrant(
            id=f"comp-{seed}-{i}",
            name=f"{rng.choice(GENERATOR_FIRST_NAMES)} {chr(65 + i % 26)}.",
            academy=rng.choice(GENERATOR_ACADEMIES),
            gender=gender,
            age=age,
            weight=float(weight),
            belt=belt,
            discipline=discipline,
        ))

    return entrants
