"""pytest-bdd steps that execute calls."""

from __future__ import annotations

from pytest_bdd import when

from call_mox.errors import CallMoxError
from tests.helpers.parameters import CallScenario


@when("the call is executed")
def execute_call(scenario_state: CallScenario) -> None:
    """Execute the scenario's call, capturing any error."""
    call = scenario_state.require_call()
    try:
        scenario_state.result = call.execute(
            scenario_state.destination, transport=scenario_state.transport
        )
    except CallMoxError as exc:
        scenario_state.error = exc
