"""Pro forma orchestrator: composes all engine sub-modules into a full analysis.

Pure computation. No I/O. Dataclasses in, ProFormaResults out.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import PropertyAssumptions
from proforma.models.results import ProFormaResults

from proforma.engine.cashflow import noi, project_cashflows
from proforma.engine.disposition import compute_sale_proceeds, year_after_hold_noi
from proforma.engine.financing import resize_loan
from proforma.engine.irr import compute_equity_multiple, compute_irr
from proforma.engine.validation import validate_assumptions

logger = logging.getLogger(__name__)

FOUR_PLACES = Decimal("0.0001")


def run_proforma(
    assumptions: PropertyAssumptions,
    forward_exit_noi: bool = False,
) -> ProFormaResults:
    """Run complete pro forma analysis.

    The loan amount is re-sized from the financing strategy before
    projecting. A cap-rate exit capitalizes final-year NOI, or the year
    after the hold when ``forward_exit_noi`` is set.

    Never raises for structurally valid input; callers that need a
    clean run should consult ``validate_assumptions`` first (see ``analyze``).
    """
    assumptions = resize_loan(assumptions)
    cashflows = project_cashflows(assumptions)
    equity = assumptions.total_equity_invested

    if cashflows:
        final = cashflows[-1]
        final_noi = final.noi
        loan_balance = final.loan_balance
    else:
        final_noi = noi(assumptions, 0)
        loan_balance = assumptions.loan_amount

    sale_noi = year_after_hold_noi(assumptions) if forward_exit_noi else final_noi
    accumulated_depreciation = sum((cf.depreciation for cf in cashflows), Decimal("0"))

    sale = compute_sale_proceeds(
        assumptions,
        sale_noi,
        loan_balance=loan_balance,
        accumulated_depreciation=accumulated_depreciation,
    )

    total_cfat = sum((cf.cash_flow_after_tax for cf in cashflows), Decimal("0"))
    total_cfbt = sum((cf.cash_flow_before_tax for cf in cashflows), Decimal("0"))
    total_cash_returned = total_cfat + sale.after_tax_proceeds
    total_before_tax_returned = total_cfbt + sale.before_tax_sale_proceeds

    # IRR vectors: equity out at t0, sale proceeds land in the final year
    irr = None
    before_tax_irr = None
    if cashflows and sale.determined:
        after_tax_cfs = [-equity] + [cf.cash_flow_after_tax for cf in cashflows]
        before_tax_cfs = [-equity] + [cf.cash_flow_before_tax for cf in cashflows]
        after_tax_cfs[-1] += sale.after_tax_proceeds
        before_tax_cfs[-1] += sale.before_tax_sale_proceeds
        irr = compute_irr(after_tax_cfs)
        before_tax_irr = compute_irr(before_tax_cfs)
    elif not sale.determined:
        logger.debug("Exit cap rate not usable; sale price undetermined, IRR skipped")

    if cashflows and equity > 0:
        average_coc = (total_cfat / len(cashflows) / equity).quantize(FOUR_PLACES, ROUND_HALF_UP)
    else:
        average_coc = Decimal("0")

    total_tax_savings = sum(
        (-cf.taxes for cf in cashflows if cf.taxes < 0), Decimal("0")
    )

    return ProFormaResults(
        annual_cashflows=cashflows,
        sale_proceeds=sale,
        loan_amount=assumptions.loan_amount,
        total_equity_invested=equity,
        total_cash_returned=total_cash_returned,
        net_profit=total_cash_returned - equity,
        irr=irr,
        before_tax_irr=before_tax_irr,
        equity_multiple=compute_equity_multiple(total_cash_returned, equity),
        before_tax_equity_multiple=compute_equity_multiple(total_before_tax_returned, equity),
        average_cash_on_cash=average_coc,
        total_tax_savings=total_tax_savings,
    )


def analyze(
    assumptions: PropertyAssumptions,
    forward_exit_noi: bool = False,
    max_hold_period_years: int | None = None,
) -> tuple[list[str], ProFormaResults | None]:
    """Validate, then run. Invalid assumptions return their errors and no results."""
    errors = validate_assumptions(assumptions, max_hold_period_years)
    if errors:
        logger.warning("Pro forma blocked by %d validation error(s): %s", len(errors), "; ".join(errors))
        return errors, None
    return [], run_proforma(assumptions, forward_exit_noi=forward_exit_noi)
