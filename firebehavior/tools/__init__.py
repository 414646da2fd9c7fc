"""Batch tools built on the fire behavior models.

.. autofunction:: run_scenarios
"""

from firebehavior.tools.scenario_runner import run_scenarios, ScenarioResult

__all__ = [
    "run_scenarios",
    "ScenarioResult",
]
