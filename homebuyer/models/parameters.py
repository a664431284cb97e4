from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Percentage:
    """A rate expressed as a fraction (0.02 for 2%)."""
    rate: Decimal


@dataclass(frozen=True)
class Absolute:
    """A fixed dollar amount."""
    amount: Decimal


RateOrAmount = Percentage | Absolute


@dataclass(frozen=True)
class MortgageParameters:
    # Purchase
    house_value: Decimal
    down_payment: RateOrAmount = Percentage(Decimal("0.20"))  # Of house value

    # Financing
    annual_interest_rate: Decimal = Decimal("0")
    loan_term_years: int = 30
    extra_monthly_principal: Decimal = Decimal("0")

    # Recurring costs
    monthly_hoa: Decimal = Decimal("0")
    property_tax: RateOrAmount = Absolute(Decimal("0"))  # Annual, % of current value
    insurance: RateOrAmount = Absolute(Decimal("0"))  # Annual, % of current value
    maintenance: RateOrAmount = Absolute(Decimal("0"))  # Annual, % of current value
    pmi: RateOrAmount = Absolute(Decimal("0"))  # % of remaining balance per year, or $ per month

    # Appreciation
    annual_appreciation_rate: Decimal = Decimal("0")

    @property
    def down_payment_amount(self) -> Decimal:
        if isinstance(self.down_payment, Percentage):
            return self.house_value * self.down_payment.rate
        return self.down_payment.amount

    @property
    def loan_amount(self) -> Decimal:
        return self.house_value - self.down_payment_amount

    @property
    def down_payment_fraction(self) -> Decimal:
        """Down payment as a fraction of the original house value."""
        if self.house_value <= 0:
            return Decimal("0")
        return self.down_payment_amount / self.house_value

    @property
    def total_payments(self) -> int:
        return self.loan_term_years * 12
