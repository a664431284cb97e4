from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MonthlyRow:
    month: int

    # Debt service
    interest: Decimal = Decimal("0")
    principal: Decimal = Decimal("0")
    extra_principal: Decimal = Decimal("0")

    # Recurring costs
    repair_costs: Decimal = Decimal("0")
    hoa: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    pmi: Decimal = Decimal("0")

    # Totals
    actual_payment: Decimal = Decimal("0")  # Every cash outflow this month
    cost_of_capital: Decimal = Decimal("0")  # Forgone return on equity
    waste_cost: Decimal = Decimal("0")  # Outflow that builds no principal, plus cost of capital
    cost: Decimal = Decimal("0")  # Economic cost: outflow - principal + cost of capital

    # Position
    remaining_debt: Decimal = Decimal("0")
    annual_interest_rate: Decimal = Decimal("0")
    house_value_at_month: Decimal = Decimal("0")
    equity_at_month: Decimal = Decimal("0")

    @property
    def total_principal(self) -> Decimal:
        return self.principal + self.extra_principal


@dataclass(frozen=True)
class MortgageSummary:
    total_interest_paid: Decimal = Decimal("0")
    total_principal_paid: Decimal = Decimal("0")
    total_taxes_paid: Decimal = Decimal("0")
    total_insurance_paid: Decimal = Decimal("0")
    total_maintenance_paid: Decimal = Decimal("0")
    total_pmi_paid: Decimal = Decimal("0")
    total_hoa_paid: Decimal = Decimal("0")
    total_payments: Decimal = Decimal("0")
    total_cost_of_capital: Decimal = Decimal("0")
    total_waste_cost: Decimal = Decimal("0")
    final_house_value: Decimal = Decimal("0")
    final_equity: Decimal = Decimal("0")
    months_to_payoff: int = 0
    effective_interest_rate: Decimal = Decimal("0")  # Annualized interest / principal

    # Loan terms, for display
    loan_amount: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")


@dataclass(frozen=True)
class AmortizationResult:
    rows: tuple[MonthlyRow, ...]
    summary: MortgageSummary

    @property
    def final_debt(self) -> Decimal:
        if not self.rows:
            return self.summary.loan_amount
        return self.rows[-1].remaining_debt
