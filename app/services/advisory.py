"""
Outlier advisory adapter.

Builds the outlier payload handed to an external suggestion service and
shields the engine from that service. The service is optional; when it is
missing or fails, a fallback message is returned and no state changes.
"""

from typing import List, Dict, Any, Optional, Callable

from app.models import Entrant
from app.core.logging_config import get_logger

logger = get_logger(__name__)

Advisor = Callable[[List[Dict[str, Any]]], str]

NO_OUTLIERS_MESSAGE = "No outliers to analyze."
NOT_CONFIGURED_MESSAGE = "Outlier advisory service is not configured."
FAILURE_MESSAGE = "Failed to analyze outliers. Please check the advisory service and try again."


def build_outlier_payload(outliers: List[Entrant]) -> List[Dict[str, Any]]:
    """Minimal per-outlier fields an advisory service needs."""
    return [
        {
            "name": entrant.name,
            "gender": entrant.gender.value,
            "belt": entrant.belt.value,
            "age": entrant.age,
            "weight": entrant.weight,
            "academy": entrant.academy,
        }
        for entrant in outliers
    ]


def request_outlier_advice(outliers: List[Entrant], advisor: Optional[Advisor] = None) -> str:
    """
    Ask the advisory service for placement suggestions.

    Args:
        outliers: Current outliers
        advisor: Callable taking the payload and returning free text, or None

    Returns:
        The service's text, or a fallback message
    """
    if not outliers:
        return NO_OUTLIERS_MESSAGE
    if advisor is None:
        return NOT_CONFIGURED_MESSAGE

    payload = build_outlier_payload(outliers)
    try:
        advice = advisor(payload)
    except Exception as e:
        logger.warning("Outlier advisory failed: %s", e, exc_info=True)
        return FAILURE_MESSAGE

    return advice or "No analysis generated."
