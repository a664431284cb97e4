"""Wizard state machine: step sequencing, field editing, and the hand-off to the engine.

One Wizard is one interactive session. It is created on start, mutated by
handle(action), and discarded when it reaches Step.EXIT.
"""

import logging
from decimal import Decimal, DecimalException, InvalidOperation
from pathlib import Path
from typing import Callable

from homebuyer.config import settings
from homebuyer.engine.amortization import run_amortization
from homebuyer.engine.export import export_csv
from homebuyer.errors import ComputationFailed, ExportFailed
from homebuyer.models.parameters import Absolute, MortgageParameters, Percentage, RateOrAmount
from homebuyer.models.results import AmortizationResult
from homebuyer.wizard.actions import Action, ActionKind
from homebuyer.wizard.fields import DualModeField, Field
from homebuyer.wizard.steps import INPUT_STEPS, STEP_INFO, Step, next_step, previous_step

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def _default_fields() -> dict[Step, Field | DualModeField]:
    def single(step: Step, text: str) -> Field:
        return Field(text, STEP_INFO[step].char_filter)

    def dual(step: Step, percent_text: str) -> DualModeField:
        char_filter = STEP_INFO[step].char_filter
        return DualModeField(Field(percent_text, char_filter), Field("", char_filter))

    return {
        Step.HOUSE_VALUE: single(Step.HOUSE_VALUE, settings.default_house_value),
        Step.DOWN_PAYMENT: dual(Step.DOWN_PAYMENT, settings.default_down_payment_percent),
        Step.HOA_FEE: single(Step.HOA_FEE, settings.default_hoa_fee),
        Step.INTEREST_RATE: single(Step.INTEREST_RATE, settings.default_interest_rate),
        Step.PROPERTY_TAX: dual(Step.PROPERTY_TAX, settings.default_property_tax_percent),
        Step.INSURANCE: dual(Step.INSURANCE, settings.default_insurance_percent),
        Step.MAINTENANCE: dual(Step.MAINTENANCE, settings.default_maintenance_percent),
        Step.PMI: dual(Step.PMI, settings.default_pmi_percent),
        Step.HOUSE_APPRECIATION: single(
            Step.HOUSE_APPRECIATION, settings.default_appreciation_rate
        ),
        Step.LOAN_TERM: single(Step.LOAN_TERM, settings.default_loan_term_years),
        Step.EXTRA_PRINCIPAL: single(Step.EXTRA_PRINCIPAL, settings.default_extra_principal),
    }


def _parse(label: str, text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ComputationFailed(label, text) from None
    if not value.is_finite():
        raise ComputationFailed(label, text)
    return value


def _parse_dual(label: str, field: DualModeField) -> RateOrAmount:
    if field.use_percent:
        return Percentage(_parse(label, field.percent.text) / HUNDRED)
    return Absolute(_parse(label, field.amount.text))


class Wizard:
    def __init__(self, export_dir: str | Path | None = None):
        self.step = Step.HOUSE_VALUE
        self.fields = _default_fields()
        self.result: AmortizationResult | None = None
        self.selected_row = 0
        self.message: str | None = None  # Last status or error for the presentation layer
        self.export_dir = Path(export_dir if export_dir is not None else settings.export_dir)

    # ── View ──────────────────────────────────────────────────────────────

    @property
    def is_finished(self) -> bool:
        return self.step is Step.EXIT

    @property
    def active_field(self) -> Field | DualModeField | None:
        return self.fields.get(self.step)

    @property
    def row_count(self) -> int:
        return len(self.result.rows) if self.result else 0

    def field(self, step: Step) -> Field | DualModeField:
        return self.fields[step]

    # ── Dispatch ──────────────────────────────────────────────────────────

    def handle(self, action: Action) -> Step:
        """Apply one action and return the step the wizard is now on.

        Actions with no entry in the transition table for the current step
        are ignored.
        """
        handler = TRANSITIONS.get((self.step, action.kind))
        if handler is None:
            logger.debug("Ignoring %s on %s", action.kind.value, self.step.value)
            return self.step
        handler(self, action)
        return self.step

    def _go(self, step: Step) -> None:
        logger.debug("Step %s -> %s", self.step.value, step.value)
        self.step = step

    # ── Input steps ───────────────────────────────────────────────────────

    def _enter(self, action: Action) -> None:
        self.message = None
        self.fields[self.step].enter(action.char or "")

    def _erase(self, action: Action) -> None:
        self.message = None
        self.fields[self.step].erase()

    def _toggle(self, action: Action) -> None:
        self.fields[self.step].toggle()

    def _advance(self, action: Action) -> None:
        if not self.fields[self.step].is_valid:
            return
        if self.step is Step.EXTRA_PRINCIPAL:
            self._confirm()
        else:
            self._go(next_step(self.step))

    def _retreat(self, action: Action) -> None:
        self._go(previous_step(self.step))

    def _exit(self, action: Action) -> None:
        self._go(Step.EXIT)

    def _confirm(self) -> None:
        try:
            self.result = self.compute()
        except ComputationFailed as e:
            logger.warning("%s", e)
            self.message = str(e)
            return
        self.selected_row = 0
        self.message = None
        self._go(Step.SPREADSHEET)

    # ── Computation ───────────────────────────────────────────────────────

    def build_parameters(self) -> MortgageParameters:
        """Freeze the current field text into parameters.

        Raises:
            ComputationFailed: a field does not parse or is out of range
        """
        f = self.fields
        house_value = _parse("house value", f[Step.HOUSE_VALUE].text)
        if house_value <= 0:
            raise ComputationFailed("house value", f[Step.HOUSE_VALUE].text, "not greater than zero")

        term_text = f[Step.LOAN_TERM].text
        max_term = settings.max_loan_term_years
        # Length check first: int() refuses very long digit strings
        if (
            not term_text.isdigit()
            or len(term_text.lstrip("0")) > len(str(max_term))
            or not 0 < int(term_text) <= max_term
        ):
            raise ComputationFailed(
                "loan term", term_text, f"not a whole number of years from 1 to {max_term}"
            )

        return MortgageParameters(
            house_value=house_value,
            down_payment=_parse_dual("down payment", f[Step.DOWN_PAYMENT]),
            monthly_hoa=_parse("HOA fee", f[Step.HOA_FEE].text),
            annual_interest_rate=_parse("interest rate", f[Step.INTEREST_RATE].text) / HUNDRED,
            property_tax=_parse_dual("property tax", f[Step.PROPERTY_TAX]),
            insurance=_parse_dual("insurance", f[Step.INSURANCE]),
            maintenance=_parse_dual("maintenance", f[Step.MAINTENANCE]),
            pmi=_parse_dual("PMI", f[Step.PMI]),
            annual_appreciation_rate=(
                _parse("appreciation rate", f[Step.HOUSE_APPRECIATION].text) / HUNDRED
            ),
            loan_term_years=int(term_text),
            extra_monthly_principal=_parse("extra principal", f[Step.EXTRA_PRINCIPAL].text),
        )

    def compute(self) -> AmortizationResult:
        params = self.build_parameters()
        try:
            result = run_amortization(params)
        except DecimalException as e:
            raise ComputationFailed("the projection", None, "left the numeric range") from e
        logger.info(
            "Computed %d months, total interest %s",
            result.summary.months_to_payoff,
            result.summary.total_interest_paid.quantize(Decimal("0.01")),
        )
        return result

    # ── Spreadsheet ───────────────────────────────────────────────────────

    def _select(self, index: int) -> None:
        last = max(self.row_count - 1, 0)
        self.selected_row = min(max(index, 0), last)

    def _next_row(self, action: Action) -> None:
        self._select(self.selected_row + 1)

    def _previous_row(self, action: Action) -> None:
        self._select(self.selected_row - 1)

    def _top(self, action: Action) -> None:
        self._select(0)

    def _bottom(self, action: Action) -> None:
        self._select(self.row_count - 1)

    def _page_forward(self, action: Action) -> None:
        self._select(self.selected_row + settings.page_stride)

    def _page_backward(self, action: Action) -> None:
        self._select(self.selected_row - settings.page_stride)

    def _show_summary(self, action: Action) -> None:
        self._go(Step.SUMMARY)

    def _back_to_inputs(self, action: Action) -> None:
        self._go(Step.EXTRA_PRINCIPAL)

    def _back_to_spreadsheet(self, action: Action) -> None:
        self._go(Step.SPREADSHEET)

    def _export(self, action: Action) -> None:
        filename = (
            settings.summary_filename if self.step is Step.SUMMARY
            else settings.spreadsheet_filename
        )
        try:
            path = self.export(self.export_dir / filename)
        except ExportFailed as e:
            self.message = str(e)
            return
        self.message = f"Exported to {path}"

    def export(self, path: str | Path) -> Path:
        """Write the current result to path. State is unchanged.

        Raises:
            ExportFailed: the file could not be written
        """
        if self.result is None:
            raise ExportFailed(str(path), ValueError("nothing computed yet"))
        return export_csv(path, self.result.rows, self.result.summary)


Handler = Callable[[Wizard, Action], None]


def _build_transitions() -> dict[tuple[Step, ActionKind], Handler]:
    table: dict[tuple[Step, ActionKind], Handler] = {}

    for step in INPUT_STEPS:
        table[(step, ActionKind.CHARACTER_ENTERED)] = Wizard._enter
        table[(step, ActionKind.ERASE)] = Wizard._erase
        table[(step, ActionKind.ADVANCE)] = Wizard._advance
        table[(step, ActionKind.RETREAT)] = Wizard._retreat
        table[(step, ActionKind.CANCEL)] = Wizard._exit
        if step.is_dual_mode:
            table[(step, ActionKind.TOGGLE_MODE)] = Wizard._toggle

    table.update({
        (Step.SPREADSHEET, ActionKind.NEXT_ROW): Wizard._next_row,
        (Step.SPREADSHEET, ActionKind.PREVIOUS_ROW): Wizard._previous_row,
        (Step.SPREADSHEET, ActionKind.TOP): Wizard._top,
        (Step.SPREADSHEET, ActionKind.BOTTOM): Wizard._bottom,
        (Step.SPREADSHEET, ActionKind.PAGE_FORWARD): Wizard._page_forward,
        (Step.SPREADSHEET, ActionKind.PAGE_BACKWARD): Wizard._page_backward,
        (Step.SPREADSHEET, ActionKind.SHOW_SUMMARY): Wizard._show_summary,
        (Step.SPREADSHEET, ActionKind.EXPORT): Wizard._export,
        (Step.SPREADSHEET, ActionKind.RETREAT): Wizard._back_to_inputs,
        (Step.SPREADSHEET, ActionKind.QUIT): Wizard._exit,
        (Step.SUMMARY, ActionKind.EXPORT): Wizard._export,
        (Step.SUMMARY, ActionKind.RETREAT): Wizard._back_to_spreadsheet,
        (Step.SUMMARY, ActionKind.QUIT): Wizard._exit,
    })
    return table


TRANSITIONS = _build_transitions()
