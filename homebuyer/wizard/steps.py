"""Wizard steps, in order, with the prompts and field layout for each."""

from dataclasses import dataclass
from enum import Enum

from homebuyer.wizard.fields import CharFilter


class Step(Enum):
    HOUSE_VALUE = "house_value"
    DOWN_PAYMENT = "down_payment"
    HOA_FEE = "hoa_fee"
    INTEREST_RATE = "interest_rate"
    PROPERTY_TAX = "property_tax"
    INSURANCE = "insurance"
    MAINTENANCE = "maintenance"
    PMI = "pmi"
    HOUSE_APPRECIATION = "house_appreciation"
    LOAN_TERM = "loan_term"
    EXTRA_PRINCIPAL = "extra_principal"
    SPREADSHEET = "spreadsheet"
    SUMMARY = "summary"
    EXIT = "exit"

    @property
    def is_input(self) -> bool:
        return self in INPUT_STEPS

    @property
    def is_dual_mode(self) -> bool:
        return self in STEP_INFO and STEP_INFO[self].dual_mode


INPUT_STEPS: tuple[Step, ...] = (
    Step.HOUSE_VALUE,
    Step.DOWN_PAYMENT,
    Step.HOA_FEE,
    Step.INTEREST_RATE,
    Step.PROPERTY_TAX,
    Step.INSURANCE,
    Step.MAINTENANCE,
    Step.PMI,
    Step.HOUSE_APPRECIATION,
    Step.LOAN_TERM,
    Step.EXTRA_PRINCIPAL,
)


@dataclass(frozen=True)
class StepInfo:
    prompt: str
    char_filter: CharFilter = CharFilter.DECIMAL
    dual_mode: bool = False
    suffix: str = ""  # "%" or " years"; money fields are shown with a leading "$"
    percent_label: str = ""
    amount_label: str = ""


STEP_INFO: dict[Step, StepInfo] = {
    Step.HOUSE_VALUE: StepInfo(
        prompt="What is the value of the house you're considering buying?",
    ),
    Step.DOWN_PAYMENT: StepInfo(
        prompt="Down Payment",
        dual_mode=True,
        percent_label="Percentage",
        amount_label="Dollar Amount",
    ),
    Step.HOA_FEE: StepInfo(
        prompt="What is the monthly HOA fee? (0 if none)",
    ),
    Step.INTEREST_RATE: StepInfo(
        prompt="What is the annual interest rate?",
        suffix="%",
    ),
    Step.PROPERTY_TAX: StepInfo(
        prompt="Property Tax",
        dual_mode=True,
        percent_label="Annual Percentage of Home Value",
        amount_label="Fixed Annual Amount",
    ),
    Step.INSURANCE: StepInfo(
        prompt="Homeowners Insurance",
        dual_mode=True,
        percent_label="Annual Percentage of Home Value",
        amount_label="Fixed Annual Amount",
    ),
    Step.MAINTENANCE: StepInfo(
        prompt="Maintenance and Repairs",
        dual_mode=True,
        percent_label="Annual Percentage of Home Value",
        amount_label="Fixed Annual Amount",
    ),
    Step.PMI: StepInfo(
        prompt="PMI (only charged while the down payment is under 20%)",
        dual_mode=True,
        percent_label="Annual Percentage of Loan Balance",
        amount_label="Fixed Monthly Amount",
    ),
    Step.HOUSE_APPRECIATION: StepInfo(
        prompt="What is the expected annual house appreciation rate? (may be negative)",
        char_filter=CharFilter.SIGNED_DECIMAL,
        suffix="%",
    ),
    Step.LOAN_TERM: StepInfo(
        prompt="What is the loan term?",
        char_filter=CharFilter.DIGITS,
        suffix=" years",
    ),
    Step.EXTRA_PRINCIPAL: StepInfo(
        prompt="Extra principal payment each month? (0 if none)",
    ),
}


def next_step(step: Step) -> Step:
    """Following input step; the last input step has no successor."""
    idx = INPUT_STEPS.index(step)
    if idx + 1 >= len(INPUT_STEPS):
        raise ValueError(f"{step} is the last input step")
    return INPUT_STEPS[idx + 1]


def previous_step(step: Step) -> Step:
    """Preceding input step; retreating from the first one exits."""
    idx = INPUT_STEPS.index(step)
    return INPUT_STEPS[idx - 1] if idx > 0 else Step.EXIT
