"""
Services for bracket building, validation, and manual overrides.
"""

from .partitioner import BracketPartitioner, BracketBuilder, process_entrants
from .validator import BracketValidator, is_valid_group
from .overrides import OverrideEngine
from .drag_policy import can_drop
from .workspace import BracketWorkspace, EntrantNotFoundError, BracketNotFoundError

__all__ = [
    "BracketPartitioner",
    "BracketBuilder",
    "process_entrants",
    "BracketValidator",
    "is_valid_group",
    "OverrideEngine",
    "can_drop",
    "BracketWorkspace",
    "EntrantNotFoundError",
    "BracketNotFoundError"
]
