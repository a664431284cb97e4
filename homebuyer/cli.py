"""Terminal front end for the home buyer calculator.

Usage:
    homebuyer                                   # step-by-step wizard
    homebuyer --house-value 300000 --rate 6     # one-shot report from flags
    homebuyer --house-value 300000 --down-payment-amount 30000 --export out.csv

In the wizard, type a value and press Enter to accept it and move on, or type
a key name: enter, backspace, tab, esc, left, right, up, down, pageup,
pagedown, ctrl+d, ctrl+u, or a single key such as j, k, g, G, s, e, q.
"""

import argparse
import logging
import sys

from homebuyer.config import settings
from homebuyer.engine.amortization import yearly_summary
from homebuyer.errors import ComputationFailed, ExportFailed
from homebuyer.keymap import translate
from homebuyer.models.results import AmortizationResult, MonthlyRow
from homebuyer.wizard import actions
from homebuyer.wizard.actions import ActionKind
from homebuyer.wizard.fields import DualModeField, Field
from homebuyer.wizard.machine import Wizard
from homebuyer.wizard.steps import STEP_INFO, Step

logger = logging.getLogger(__name__)

NAMED_KEYS = {
    "enter", "backspace", "tab", "esc", "left", "right", "up", "down",
    "pageup", "pagedown", "ctrl+d", "ctrl+u",
}
TABLE_WINDOW = 12


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a decimal/float as a percentage string."""
    return f"{float(v) * 100:.2f}%"


def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _display_value(step: Step, text: str, percent: bool) -> str:
    info = STEP_INFO[step]
    if percent or info.suffix == "%":
        return f"{text}%"
    if info.suffix:
        return f"{text}{info.suffix}"
    return f"${text}"


# ── Screens ──────────────────────────────────────────────────────────────────

def print_input_step(wizard: Wizard) -> None:
    step = wizard.step
    info = STEP_INFO[step]
    field = wizard.active_field
    _header("Home Buyer Calculator")
    print(f"  {info.prompt}")
    if isinstance(field, DualModeField):
        for label, side, is_percent in (
            (info.percent_label, field.percent, True),
            (info.amount_label, field.amount, False),
        ):
            marker = "▶" if field.use_percent == is_percent else " "
            print(f"  {marker} {label}: {_display_value(step, side.text, is_percent)}")
        print("\n  tab: toggle % / $ | enter: continue | esc: back")
    else:
        print(f"  {_display_value(step, field.text, False)}")
        back = "esc/q: exit" if step is Step.HOUSE_VALUE else "esc: back"
        print(f"\n  enter: continue | {back}")
    if wizard.message:
        print(f"  ! {wizard.message}")


def _row_line(row: MonthlyRow, selected: bool) -> str:
    marker = ">" if selected else " "
    return (
        f"{marker} {row.month:>4}  {_dollar(row.interest):>8}  {_dollar(row.total_principal):>9}  "
        f"{_dollar(row.taxes + row.insurance + row.repair_costs + row.hoa + row.pmi):>8}  "
        f"{_dollar(row.actual_payment):>9}  {_dollar(row.cost):>9}  "
        f"{_dollar(row.remaining_debt):>10}  {_dollar(row.equity_at_month):>10}"
    )


def print_spreadsheet(wizard: Wizard) -> None:
    result = wizard.result
    _header(f"Amortization Schedule  (row {wizard.selected_row + 1} of {wizard.row_count})")
    print(
        f"  {'Mo':>4}  {'Interest':>8}  {'Principal':>9}  {'Costs':>8}  "
        f"{'Payment':>9}  {'Cost':>9}  {'Debt':>10}  {'Equity':>10}"
    )
    if result and result.rows:
        start = max(0, min(wizard.selected_row - TABLE_WINDOW // 2, len(result.rows) - TABLE_WINDOW))
        for idx, row in enumerate(result.rows[start:start + TABLE_WINDOW], start=start):
            print(_row_line(row, idx == wizard.selected_row))
    else:
        print("  (no loan: nothing to amortize)")
    print("\n  j/k: move | ctrl+d/ctrl+u: page | g/G: top/bottom | s: summary | e: export | esc: back | q: quit")
    if wizard.message:
        print(f"  ! {wizard.message}")


def print_summary(result: AmortizationResult) -> None:
    s = result.summary
    _header("Mortgage Summary")
    print(f"  Loan Amount:            {_dollar(s.loan_amount)}")
    print(f"  Monthly Payment (P&I):  ${float(s.monthly_payment):,.2f}")
    print(f"  Total Payments:         {_dollar(s.total_payments)}")
    print(f"  Total Principal:        {_dollar(s.total_principal_paid)}")
    print(f"  Total Interest:         {_dollar(s.total_interest_paid)}")
    print(f"  Total Taxes:            {_dollar(s.total_taxes_paid)}")
    print(f"  Total Insurance:        {_dollar(s.total_insurance_paid)}")
    print(f"  Total Maintenance:      {_dollar(s.total_maintenance_paid)}")
    print(f"  Total PMI:              {_dollar(s.total_pmi_paid)}")
    print(f"  Total HOA:              {_dollar(s.total_hoa_paid)}")
    print(f"  Total Cost of Capital:  {_dollar(s.total_cost_of_capital)}")
    print(f"  Total Waste Cost:       {_dollar(s.total_waste_cost)}")
    print(f"  Final House Value:      {_dollar(s.final_house_value)}")
    print(f"  Final Equity:           {_dollar(s.final_equity)}")
    print(f"  Months to Payoff:       {s.months_to_payoff} ({s.months_to_payoff / 12:.1f} years)")
    print(f"  Effective Rate:         {_pct(s.effective_interest_rate)}")

    yearly = yearly_summary(result)
    if yearly:
        print()
        print(f"  {'Yr':>3}  {'Interest':>10}  {'Principal':>10}  {'Costs':>10}  {'Balance':>11}  {'Equity':>11}")
        for y in yearly:
            print(
                f"  {int(y['year']):>3}  {_dollar(y['interest']):>10}  {_dollar(y['principal']):>10}  "
                f"{_dollar(y['costs']):>10}  {_dollar(y['ending_balance']):>11}  "
                f"{_dollar(y['ending_equity']):>11}"
            )


def render(wizard: Wizard) -> None:
    if wizard.step.is_input:
        print_input_step(wizard)
    elif wizard.step is Step.SPREADSHEET:
        print_spreadsheet(wizard)
    elif wizard.step is Step.SUMMARY and wizard.result is not None:
        print_summary(wizard.result)
        print("\n  e: export | esc: back | q: quit")
        if wizard.message:
            print(f"  ! {wizard.message}")


# ── Driver ───────────────────────────────────────────────────────────────────

def feed_line(wizard: Wizard, line: str) -> None:
    """Apply one line of user input: a key name, or a value to type and accept."""
    key = line.strip()
    if key.lower() in NAMED_KEYS:
        key = key.lower()
    elif wizard.step.is_input and key == "":
        key = "enter"

    action = translate(wizard.step, key)
    if wizard.step.is_input and key not in NAMED_KEYS and (
        action is None or action.kind is ActionKind.CHARACTER_ENTERED
    ):
        # Typed value: replace the active field, then accept it. A line with
        # nothing the field accepts leaves the current text alone.
        typed = Field(char_filter=STEP_INFO[wizard.step].char_filter)
        typed.set(key)
        if not typed.text:
            wizard.message = f"Ignored {key!r}: no usable characters"
            return
        for _ in range(len(wizard.active_field.text)):
            wizard.handle(actions.ERASE)
        for char in typed.text:
            wizard.handle(actions.character_entered(char))
        wizard.handle(actions.ADVANCE)
        return

    if action is not None:
        wizard.handle(action)


def run_interactive(wizard: Wizard) -> int:
    while not wizard.is_finished:
        render(wizard)
        try:
            line = input("> ")
        except EOFError:
            wizard.handle(actions.CANCEL if wizard.step.is_input else actions.QUIT)
            break
        feed_line(wizard, line)
    return 0


def wizard_from_args(args: argparse.Namespace) -> Wizard:
    """Fill a wizard's fields from command-line flags."""
    wizard = Wizard(export_dir=args.export_dir)
    singles = {
        Step.HOUSE_VALUE: args.house_value,
        Step.HOA_FEE: args.hoa,
        Step.INTEREST_RATE: args.rate,
        Step.HOUSE_APPRECIATION: args.appreciation,
        Step.LOAN_TERM: args.term,
        Step.EXTRA_PRINCIPAL: args.extra_principal,
    }
    for step, value in singles.items():
        if value is not None:
            wizard.field(step).set(value)

    duals = {
        Step.DOWN_PAYMENT: (args.down_payment_percent, args.down_payment_amount),
        Step.PROPERTY_TAX: (args.tax_percent, args.tax_amount),
        Step.INSURANCE: (args.insurance_percent, args.insurance_amount),
        Step.MAINTENANCE: (args.maintenance_percent, args.maintenance_amount),
        Step.PMI: (args.pmi_percent, args.pmi_amount),
    }
    for step, (percent, amount) in duals.items():
        field = wizard.field(step)
        if amount is not None:
            field.use_percent = False
            field.amount.set(amount)
        elif percent is not None:
            field.percent.set(percent)
    return wizard


def run_batch(wizard: Wizard, export_path: str | None) -> int:
    try:
        result = wizard.compute()
    except ComputationFailed as e:
        print(f"Error: {e}", file=sys.stderr)
        return 0
    wizard.result = result
    print_summary(result)
    if export_path:
        try:
            path = wizard.export(export_path)
        except ExportFailed as e:
            print(f"Error: {e}", file=sys.stderr)
            return 0
        print(f"\n  Exported to {path}")
    return 0


def _dual_group(parser: argparse.ArgumentParser, name: str, what: str, amount_help: str) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(f"--{name}-percent", help=f"{what} as a percentage")
    group.add_argument(f"--{name}-amount", help=amount_help)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Home buyer mortgage and ownership cost calculator")
    parser.add_argument("--house-value", help="Purchase price; giving it runs a one-shot report")
    _dual_group(parser, "down-payment", "Down payment", "Down payment in dollars")
    parser.add_argument("--hoa", help="Monthly HOA fee")
    parser.add_argument("--rate", help="Annual interest rate in percent")
    _dual_group(parser, "tax", "Property tax (annual % of value)", "Annual property tax in dollars")
    _dual_group(parser, "insurance", "Insurance (annual % of value)", "Annual insurance in dollars")
    _dual_group(parser, "maintenance", "Maintenance (annual % of value)", "Annual maintenance in dollars")
    _dual_group(parser, "pmi", "PMI (annual % of loan balance)", "Monthly PMI in dollars")
    parser.add_argument("--appreciation", help="Annual appreciation in percent (may be negative)")
    parser.add_argument("--term", help="Loan term in years")
    parser.add_argument("--extra-principal", help="Extra principal paid each month")
    parser.add_argument("--export", dest="export_path", help="Write the schedule to this CSV file")
    parser.add_argument("--export-dir", default=settings.export_dir, help="Directory for wizard exports")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    wizard = wizard_from_args(args)
    if args.house_value is not None:
        return run_batch(wizard, args.export_path)
    return run_interactive(wizard)


if __name__ == "__main__":
    sys.exit(main())
