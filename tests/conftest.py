"""Canonical test fixtures used across engine and wizard tests.

Fixture: $300K house, 20% down, 6% rate, 30yr fixed, no other costs.
"""

import pytest
from decimal import Decimal

from homebuyer.models.parameters import Absolute, MortgageParameters, Percentage
from homebuyer.wizard import actions
from homebuyer.wizard.machine import Wizard
from homebuyer.wizard.steps import INPUT_STEPS


@pytest.fixture
def canonical_params() -> MortgageParameters:
    """$300K house, 20% down, 6%, 30 years, nothing else."""
    return MortgageParameters(
        house_value=Decimal("300000"),
        down_payment=Percentage(Decimal("0.20")),
        annual_interest_rate=Decimal("0.06"),
        loan_term_years=30,
        extra_monthly_principal=Decimal("0"),
        monthly_hoa=Decimal("0"),
        property_tax=Absolute(Decimal("0")),
        insurance=Absolute(Decimal("0")),
        maintenance=Absolute(Decimal("0")),
        pmi=Absolute(Decimal("0")),
        annual_appreciation_rate=Decimal("0"),
    )


@pytest.fixture
def full_cost_params() -> MortgageParameters:
    """$400K house, 10% down, every cost category populated."""
    return MortgageParameters(
        house_value=Decimal("400000"),
        down_payment=Percentage(Decimal("0.10")),
        annual_interest_rate=Decimal("0.065"),
        loan_term_years=30,
        extra_monthly_principal=Decimal("0"),
        monthly_hoa=Decimal("150"),
        property_tax=Percentage(Decimal("0.02")),
        insurance=Percentage(Decimal("0.0035")),
        maintenance=Absolute(Decimal("3600")),
        pmi=Percentage(Decimal("0.005")),
        annual_appreciation_rate=Decimal("0.03"),
    )


@pytest.fixture
def wizard(tmp_path) -> Wizard:
    """Fresh wizard that exports into a temporary directory."""
    return Wizard(export_dir=tmp_path)


@pytest.fixture
def enter_values():
    """Type one value per input step (replacing the default) and advance past each.

    None keeps the step's current text.
    """
    def _enter(wiz: Wizard, values: list[str | None]) -> None:
        for step, value in zip(INPUT_STEPS, values):
            assert wiz.step is step
            if value is not None:
                for _ in range(len(wiz.active_field.text)):
                    wiz.handle(actions.ERASE)
                for char in value:
                    wiz.handle(actions.character_entered(char))
            wiz.handle(actions.ADVANCE)
    return _enter


@pytest.fixture
def canonical_values() -> list[str | None]:
    """Wizard entries matching canonical_params."""
    return [
        "300000",  # House value
        "20",  # Down payment %
        "0",  # HOA
        "6",  # Interest rate
        "0",  # Property tax %
        "0",  # Insurance %
        "0",  # Maintenance %
        "0",  # PMI %
        "0",  # Appreciation
        "30",  # Loan term
        "0",  # Extra principal
    ]


@pytest.fixture
def computed_wizard(wizard, enter_values, canonical_values) -> Wizard:
    """Wizard driven through every input step and onto the spreadsheet."""
    enter_values(wizard, canonical_values)
    return wizard
