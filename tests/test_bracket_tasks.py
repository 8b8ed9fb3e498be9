"""
Test the async bracket task body without a broker.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app.models import BracketSettings
from app.services.partitioner import process_entrants
from app.services.roster_generator import generate_roster
from app.tasks.bracket_tasks import generate_brackets_task


@pytest.fixture(autouse=True)
def no_result_backend(monkeypatch):
    # Progress updates would otherwise go to Redis
    monkeypatch.setattr(generate_brackets_task, "update_state", lambda *args, **kwargs: None)


def test_task_matches_direct_build():
    roster = generate_roster(80, seed=12)
    settings = BracketSettings(target_bracket_size=3)

    response = generate_brackets_task.run(
        [entrant.to_dict() for entrant in roster], settings.to_dict()
    )

    assert response["success"] is True
    assert response["result"] == process_entrants(roster, settings).to_dict()
    assert response["generation_time"] >= 0


def test_task_ignores_unknown_settings_keys():
    roster = generate_roster(10, seed=1)
    response = generate_brackets_task.run(
        [entrant.to_dict() for entrant in roster], {"target_bracket_size": 4, "theme": "dark"}
    )
    assert response["success"] is True


def test_task_reports_bad_input():
    response = generate_brackets_task.run([{"id": "x", "gender": "Robot", "belt": "Blue"}], {})
    assert response["success"] is False
    assert "Robot" in response["error"]
    assert response["traceback"]
