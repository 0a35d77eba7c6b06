"""Pro forma routes: run, validate, loan sizing."""

import logging

from fastapi import APIRouter, HTTPException

from proforma.api.schemas import (
    AmortizationScheduleResponse,
    AssumptionsPayload,
    CompletionStateResponse,
    LoanSizeResponse,
    ProFormaRequest,
    ProFormaResponse,
    SensitivityResponse,
    ValidationResponse,
)
from proforma.models.assumptions import PropertyAssumptions
from proforma.models.results import ProFormaResults
from proforma.engine.cashflow import dscr, noi
from proforma.engine.debt import amortization_schedule, annual_debt_service
from proforma.engine.financing import needs_loan_update, size_loan
from proforma.engine.metrics import purchase_cap_rate, sensitivity_analysis, unlevered_irr
from proforma.engine.proforma import analyze
from proforma.engine.validation import completion_state, validate_assumptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["proforma"])


def build_response(
    assumptions: PropertyAssumptions,
    results: ProFormaResults,
    include_sensitivity: bool = False,
) -> ProFormaResponse:
    """Convert engine results to the API response, adding derived metrics."""
    response = ProFormaResponse.model_validate(results)
    response.purchase_cap_rate = purchase_cap_rate(results, assumptions.purchase_price)
    response.unlevered_irr = unlevered_irr(assumptions)
    if include_sensitivity:
        response.sensitivity = SensitivityResponse.model_validate(
            sensitivity_analysis(assumptions, results)
        )
    return response


def run_or_422(
    assumptions: PropertyAssumptions,
    forward_exit_noi: bool = False,
    include_sensitivity: bool = False,
) -> ProFormaResponse:
    errors, results = analyze(assumptions, forward_exit_noi=forward_exit_noi)
    if results is None:
        raise HTTPException(status_code=422, detail=errors)
    return build_response(assumptions, results, include_sensitivity)


@router.post("/proforma", response_model=ProFormaResponse)
async def run_proforma_endpoint(req: ProFormaRequest):
    """Run the full pro forma. Invalid assumptions return 422 with the error list."""
    return run_or_422(
        req.assumptions.to_assumptions(),
        forward_exit_noi=req.forward_exit_noi,
        include_sensitivity=req.include_sensitivity,
    )


@router.post("/proforma/validate", response_model=ValidationResponse)
async def validate_endpoint(payload: AssumptionsPayload):
    assumptions = payload.to_assumptions()
    errors = validate_assumptions(assumptions)
    return ValidationResponse(
        valid=not errors,
        errors=errors,
        completion=CompletionStateResponse.model_validate(completion_state(assumptions)),
    )


@router.post("/loan/size", response_model=LoanSizeResponse)
async def size_loan_endpoint(payload: AssumptionsPayload):
    """Size the loan from the financing strategy without running the pro forma."""
    assumptions = payload.to_assumptions()
    amount = size_loan(assumptions)
    debt_service = annual_debt_service(
        amount,
        assumptions.interest_rate,
        assumptions.amortization_years,
        assumptions.payments_per_year,
    )
    year1_noi = noi(assumptions, 0)
    ltv = amount / assumptions.purchase_price * 100 if assumptions.purchase_price > 0 else 0
    return LoanSizeResponse(
        financing_type=assumptions.financing_type,
        loan_amount=amount,
        cached_loan_amount=assumptions.loan_amount,
        needs_update=needs_loan_update(assumptions.loan_amount, amount),
        annual_debt_service=debt_service,
        year1_noi=year1_noi,
        year1_dscr=dscr(year1_noi, debt_service),
        ltv=ltv,
    )


@router.post("/loan/schedule", response_model=AmortizationScheduleResponse)
async def loan_schedule_endpoint(payload: AssumptionsPayload):
    """Payment-by-payment schedule for the sized loan over the hold period."""
    assumptions = payload.to_assumptions()
    if assumptions.amortization_years <= 0 or assumptions.payments_per_year <= 0:
        raise HTTPException(status_code=422, detail=["Amortization period must be greater than 0 years"])
    schedule = amortization_schedule(
        size_loan(assumptions),
        assumptions.interest_rate,
        assumptions.amortization_years,
        assumptions.payments_per_year,
        years=assumptions.hold_period_years if assumptions.hold_period_years > 0 else None,
    )
    return AmortizationScheduleResponse.model_validate(schedule)
