"""
Celery configuration for async bracket building.

Bracket builds run on their own queue so a long roster does not hold up
other work on the same Redis instance.
"""

from celery import Celery

from app.core.config import REDIS_URL, BRACKET_QUEUE, RESULT_EXPIRES_SECONDS

celery_app = Celery(
    "bracket_builder",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["app.tasks.bracket_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    enable_utc=True,
    task_track_started=True,
    task_default_queue=BRACKET_QUEUE,
    task_routes={"generate_brackets": {"queue": BRACKET_QUEUE}},
    result_expires=RESULT_EXPIRES_SECONDS,
    # Builds are pure and take seconds; anything longer is a runaway roster
    task_time_limit=120,
    task_soft_time_limit=100,
    worker_prefetch_multiplier=1,
)
