"""Canned scenario routes."""

from fastapi import APIRouter, HTTPException

from proforma.api.routes.proforma import run_or_422
from proforma.api.schemas import AssumptionsPayload, ProFormaResponse, ScenarioSummary
from proforma.scenarios import SCENARIOS, get_scenario, randomize_scenario

router = APIRouter(prefix="/api/v1/scenarios", tags=["scenarios"])


def _lookup(scenario_id: str):
    try:
        return get_scenario(scenario_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown scenario: {scenario_id}")


@router.get("", response_model=list[ScenarioSummary])
async def list_scenarios():
    return [ScenarioSummary.model_validate(s) for s in SCENARIOS]


@router.get("/{scenario_id}/assumptions", response_model=AssumptionsPayload)
async def get_scenario_assumptions(scenario_id: str, seed: int | None = None):
    """Scenario inputs, optionally jittered with a reproducible ``seed``."""
    assumptions = _lookup(scenario_id).assumptions
    if seed is not None:
        assumptions = randomize_scenario(assumptions, seed)
    return AssumptionsPayload.model_validate(assumptions)


@router.get("/{scenario_id}/proforma", response_model=ProFormaResponse)
async def run_scenario(
    scenario_id: str,
    forward_exit_noi: bool = False,
    include_sensitivity: bool = False,
):
    return run_or_422(
        _lookup(scenario_id).assumptions,
        forward_exit_noi=forward_exit_noi,
        include_sensitivity=include_sensitivity,
    )
