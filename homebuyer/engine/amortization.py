"""Month-by-month mortgage and ownership cost projection.

Pure functions: MortgageParameters in, AmortizationResult out. No I/O.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from homebuyer.config import settings
from homebuyer.models.parameters import Absolute, MortgageParameters, Percentage, RateOrAmount
from homebuyer.models.results import AmortizationResult, MonthlyRow, MortgageSummary

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TWELVE = Decimal("12")


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Level monthly payment, unrounded."""
    if principal <= 0:
        return ZERO
    n = term_years * 12
    if annual_rate == 0:
        return principal / n

    r = annual_rate / TWELVE
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    if factor == 1:
        # Rate below the context precision: indistinguishable from zero
        return principal / n
    return principal * (r * factor) / (factor - 1)


@dataclass(frozen=True)
class _ResolvedCosts:
    """Active representation of each cost category, split into rate and amount."""
    annual_tax_rate: Decimal
    annual_tax_amount: Decimal
    annual_insurance_rate: Decimal
    annual_insurance_amount: Decimal
    annual_maintenance_rate: Decimal
    annual_maintenance_amount: Decimal
    pmi_rate: Decimal | None  # None when PMI is a fixed monthly amount
    monthly_pmi_amount: Decimal
    pmi_applies: bool


def _split(value: RateOrAmount) -> tuple[Decimal | None, Decimal]:
    if isinstance(value, Percentage):
        return value.rate, ZERO
    return None, value.amount


def _resolve_costs(params: MortgageParameters) -> _ResolvedCosts:
    tax_rate, tax_amount = _split(params.property_tax)
    ins_rate, ins_amount = _split(params.insurance)
    maint_rate, maint_amount = _split(params.maintenance)
    pmi_rate, pmi_amount = _split(params.pmi)
    return _ResolvedCosts(
        annual_tax_rate=tax_rate or ZERO,
        annual_tax_amount=tax_amount,
        annual_insurance_rate=ins_rate or ZERO,
        annual_insurance_amount=ins_amount,
        annual_maintenance_rate=maint_rate or ZERO,
        annual_maintenance_amount=maint_amount,
        pmi_rate=pmi_rate,
        monthly_pmi_amount=pmi_amount,
        # Eligibility is fixed at origination against the original house value
        pmi_applies=params.down_payment_fraction < settings.pmi_threshold,
    )


def _value_based(house_value: Decimal, annual_rate: Decimal, annual_amount: Decimal) -> Decimal:
    """Monthly share of a cost quoted as % of value per year or as an annual amount."""
    if annual_rate:
        return house_value * annual_rate / TWELVE
    return annual_amount / TWELVE


def run_amortization(
    params: MortgageParameters,
    max_months: int | None = None,
) -> AmortizationResult:
    """Project the loan month by month until paid off or the horizon is reached.

    Args:
        params: Validated purchase and financing parameters
        max_months: Projection horizon (defaults to settings.max_months)
    """
    horizon = settings.max_months if max_months is None else max_months
    costs = _resolve_costs(params)

    loan_amount = params.loan_amount
    annual_rate = params.annual_interest_rate
    r = annual_rate / TWELVE
    scheduled_months = params.total_payments
    pmt = monthly_payment(loan_amount, annual_rate, params.loan_term_years)
    extra = params.extra_monthly_principal
    monthly_appreciation = params.annual_appreciation_rate / TWELVE
    hoa = params.monthly_hoa

    rows: list[MonthlyRow] = []
    balance = loan_amount
    house_value = params.house_value

    total_interest = ZERO
    total_principal = ZERO
    total_taxes = ZERO
    total_insurance = ZERO
    total_maintenance = ZERO
    total_pmi = ZERO
    total_hoa = ZERO
    total_payments = ZERO
    total_cost_of_capital = ZERO
    total_waste = ZERO

    for month in range(1, horizon + 1):
        if balance <= 0:
            break

        interest = balance * r
        extra_paid = min(extra, balance)
        principal = pmt - interest

        # Final payment adjustment: never pay past zero, and clear the
        # residual left by rounding on the last scheduled payment
        if principal + extra_paid > balance or month == scheduled_months:
            principal = balance - extra_paid

        house_value *= 1 + monthly_appreciation

        taxes = _value_based(house_value, costs.annual_tax_rate, costs.annual_tax_amount)
        insurance = _value_based(
            house_value, costs.annual_insurance_rate, costs.annual_insurance_amount
        )
        repairs = _value_based(
            house_value, costs.annual_maintenance_rate, costs.annual_maintenance_amount
        )

        # Amount floats with the declining balance; eligibility does not
        if costs.pmi_applies and balance > 0:
            if costs.pmi_rate is not None:
                pmi = balance * costs.pmi_rate / TWELVE
            else:
                pmi = costs.monthly_pmi_amount
        else:
            pmi = ZERO

        actual_payment = interest + principal + extra_paid + repairs + hoa + taxes + insurance + pmi

        equity = house_value - balance
        cost_of_capital = equity * annual_rate / TWELVE
        waste = interest + repairs + hoa + taxes + insurance + pmi + cost_of_capital
        cost = actual_payment - principal - extra_paid + cost_of_capital

        balance -= principal + extra_paid

        total_interest += interest
        total_principal += principal + extra_paid
        total_taxes += taxes
        total_insurance += insurance
        total_maintenance += repairs
        total_pmi += pmi
        total_hoa += hoa
        total_payments += actual_payment
        total_cost_of_capital += cost_of_capital
        total_waste += waste

        rows.append(MonthlyRow(
            month=month,
            interest=interest,
            principal=principal,
            extra_principal=extra_paid,
            repair_costs=repairs,
            hoa=hoa,
            taxes=taxes,
            insurance=insurance,
            pmi=pmi,
            actual_payment=actual_payment,
            cost_of_capital=cost_of_capital,
            waste_cost=waste,
            cost=cost,
            remaining_debt=balance,
            annual_interest_rate=annual_rate,
            house_value_at_month=house_value,
            equity_at_month=equity,
        ))

    months = len(rows)
    final_debt = max(balance, ZERO)
    if total_principal > 0 and months > 0:
        effective_rate = (total_interest / total_principal) * (TWELVE / months)
    else:
        effective_rate = ZERO

    summary = MortgageSummary(
        total_interest_paid=total_interest,
        total_principal_paid=total_principal,
        total_taxes_paid=total_taxes,
        total_insurance_paid=total_insurance,
        total_maintenance_paid=total_maintenance,
        total_pmi_paid=total_pmi,
        total_hoa_paid=total_hoa,
        total_payments=total_payments,
        total_cost_of_capital=total_cost_of_capital,
        total_waste_cost=total_waste,
        final_house_value=house_value,
        final_equity=house_value - final_debt,
        months_to_payoff=months,
        effective_interest_rate=effective_rate,
        loan_amount=loan_amount,
        monthly_payment=pmt,
    )
    logger.debug(
        "Projected %d months on %s loan (payment %s)", months, loan_amount, pmt
    )
    return AmortizationResult(rows=tuple(rows), summary=summary)


def yearly_summary(result: AmortizationResult) -> list[dict[str, Decimal]]:
    """Aggregate monthly rows by loan year.

    Returns list of dicts with keys: year, interest, principal, costs, payments,
    ending_balance, ending_equity, house_value
    """
    yearly: list[dict[str, Decimal]] = []
    year_interest = ZERO
    year_principal = ZERO
    year_costs = ZERO
    year_payments = ZERO

    for row in result.rows:
        year_interest += row.interest
        year_principal += row.total_principal
        year_costs += row.repair_costs + row.hoa + row.taxes + row.insurance + row.pmi
        year_payments += row.actual_payment

        if row.month % 12 == 0 or row.month == len(result.rows):
            yearly.append({
                "year": Decimal((row.month - 1) // 12 + 1),
                "interest": year_interest,
                "principal": year_principal,
                "costs": year_costs,
                "payments": year_payments,
                "ending_balance": row.remaining_debt,
                "ending_equity": row.house_value_at_month - row.remaining_debt,
                "house_value": row.house_value_at_month,
            })
            year_interest = ZERO
            year_principal = ZERO
            year_costs = ZERO
            year_payments = ZERO

    return yearly
