"""
Celery tasks for bracket building.
"""

from datetime import datetime
import traceback
from typing import List, Dict, Any

from app.core.celery_app import celery_app
from app.core.logging_config import get_logger
from app.models import Entrant, BracketSettings
from app.services.partitioner import process_entrants

logger = get_logger(__name__)


@celery_app.task(bind=True, name="generate_brackets")
def generate_brackets_task(self, entrants: List[Dict[str, Any]], settings: Dict[str, Any]):
    """
    Async task to build brackets for a roster.

    Args:
        entrants: Entrant records as dicts
        settings: BracketSettings fields as a dict

    Returns:
        dict: Serialized result, or an error description
    """
    try:
        self.update_state(
            state="PROGRESS",
            meta={"status": f"Building brackets for {len(entrants)} entrants..."}
        )

        start_time = datetime.now()

        roster = [Entrant.from_dict(record) for record in entrants]
        result = process_entrants(roster, BracketSettings.from_dict(settings))

        generation_time = (datetime.now() - start_time).total_seconds()

        return {
            "success": True,
            "message": f"Built {len(result.brackets)} brackets with {len(result.outliers)} outliers",
            "result": result.to_dict(),
            "generation_time": generation_time
        }

    except Exception as e:
        error_trace = traceback.format_exc()
        logger.error("Error in generate_brackets_task: %s", error_trace)

        return {
            "success": False,
            "message": f"Bracket generation failed: {str(e)}",
            "error": str(e),
            "traceback": error_trace
        }
