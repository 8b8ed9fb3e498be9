"""
Run a Celery worker for the bracket queue.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.celery_app import celery_app
from app.core.config import BRACKET_QUEUE, WORKER_CONCURRENCY

if __name__ == "__main__":
    print("=" * 60)
    print(f"Bracket Builder worker - queue '{BRACKET_QUEUE}', concurrency {WORKER_CONCURRENCY}")
    print("=" * 60)

    # prefork is unavailable on Windows
    pool = "--pool=solo" if os.name == "nt" else "--pool=prefork"
    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        f"--queues={BRACKET_QUEUE}",
        f"--concurrency={WORKER_CONCURRENCY}",
        pool,
    ])
