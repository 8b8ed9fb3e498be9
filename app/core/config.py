"""
Configuration constants for the Tournament Bracket Builder.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Redis / Celery
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
BRACKET_QUEUE = os.getenv("BRACKET_QUEUE", "brackets")
WORKER_CONCURRENCY = _env_int("WORKER_CONCURRENCY", 2)
# Finished results are only polled once by the frontend
RESULT_EXPIRES_SECONDS = _env_int("RESULT_EXPIRES_SECONDS", 3600)

# Frontend origins allowed by CORS (comma separated)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Bracket Size Rules
MIN_BRACKET_SIZE = 2
MAX_BRACKET_SIZE = 5   # Contest format hard cap
WINDOW_SIZES = (3, 4, 5)

# Window order tried by the partitioner for each target size: the target,
# then the other sizes largest first. Any other target uses largest first.
DEFAULT_SIZE_PRIORITY = sorted(WINDOW_SIZES, reverse=True)
SIZE_PRIORITY = {
    target: [target] + [size for size in DEFAULT_SIZE_PRIORITY if size != target]
    for target in WINDOW_SIZES
}

# Weight Rules
ULTRA_HEAVY_THRESHOLD = 225  # Lightest member at or above this waives weight limits

# Age Rules
ADULT_MAX_AGE_GAP = 15
KIDS_MAX_AGE_GAP = 5
UNBOUNDED_AGE_GAP = 100  # Used when adults ignore the age gap

# Drag compatibility: youngest entrant allowed into an Adult/Masters bracket
MIN_AGE_FOR_ADULT_BRACKET = 13

# Division bands: (max age inclusive, label template). {gender} is filled in.
DIVISION_BANDS = [
    (8, "8U Coed"),
    (12, "9-12 Coed"),
    (15, "13-15 {gender}"),
    (34, "Adult (16+) {gender}"),
    (39, "Masters I (35+) {gender}"),
    (44, "Masters II (40+) {gender}"),
]
OLDEST_DIVISION = "Masters III (45+) {gender}"

ADULT_DIVISION_PREFIXES = ("Adult", "Masters")

# Display order, youngest to oldest
DIVISION_PRECEDENCE = [
    "8U Coed",
    "9-12 Coed",
    "13-15 Male",
    "13-15 Female",
    "Adult (16+) Male",
    "Adult (16+) Female",
    "Masters I (35+) Male",
    "Masters I (35+) Female",
    "Masters II (40+) Male",
    "Masters II (40+) Female",
    "Masters III (45+) Male",
    "Masters III (45+) Female",
]

DISCIPLINE_PRECEDENCE = ["Gi", "No-Gi"]

# Skill tier ranks. Kids belts, adult belts and No-Gi levels share one scale.
BELT_RANKS = {
    "White": 1,
    "Beginner": 1,
    "Grey": 2,
    "Yellow": 3,
    "Orange": 4,
    "Green": 5,
    "Blue": 6,
    "Intermediate": 6,
    "Purple": 7,
    "Advanced": 7,
    "Brown": 8,
    "Expert": 8,
    "Black": 9,
}
UNKNOWN_RANK = 999

# Manually created brackets
MANUAL_BRACKET_DIVISION = "Open"
OUTLIERS_TARGET = "outliers"
NEW_BRACKET_TARGET = "new"

# Default Settings (overridable from the environment)
DEFAULT_TARGET_BRACKET_SIZE = _env_int("BRACKET_TARGET_SIZE", 4)
DEFAULT_KIDS_MAX_WEIGHT_DIFF_PERCENT = _env_float("KIDS_MAX_WEIGHT_DIFF_PERCENT", 15.0)
DEFAULT_ADULTS_MAX_WEIGHT_DIFF_PERCENT = _env_float("ADULTS_MAX_WEIGHT_DIFF_PERCENT", 20.0)
DEFAULT_ADULTS_IGNORE_AGE_GAP = _env_bool("ADULTS_IGNORE_AGE_GAP", True)
DEFAULT_MAX_WEIGHT_DIFF_ABSOLUTE_CAP = _env_float("MAX_WEIGHT_DIFF_ABSOLUTE_CAP", 25.0)
DEFAULT_ULTRA_HEAVY_IGNORE = _env_bool("ULTRA_HEAVY_IGNORE", True)

# Demo roster generator
GENERATOR_FIRST_NAMES = [
    "James", "Mary", "John", "Patricia", "Robert", "Jennifer", "Michael", "Linda",
    "William", "Elizabeth", "David", "Barbara", "Richard", "Susan", "Joseph",
    "Jessica", "Thomas", "Sarah", "Charles", "Karen",
]
GENERATOR_ACADEMIES = [
    "Gracie Barra", "Alliance", "Checkmat", "Atos", "10th Planet",
    "Renzo Gracie", "Carlson Gracie", "GF Team", "Unity", "Fabio Clemente",
]

