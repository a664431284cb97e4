"""Delimited-text export of a projection.

Rows first, then an optional summary section after a blank line.
"""

import csv
import logging
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Iterable

from homebuyer.errors import ExportFailed
from homebuyer.models.results import MonthlyRow, MortgageSummary

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")

SUMMARY_HEADER = "Summary Statistics"

# (column header, MonthlyRow attribute, precision); None precision = integer
ROW_COLUMNS: list[tuple[str, str, Decimal | None]] = [
    ("Month", "month", None),
    ("Interest", "interest", TWO_PLACES),
    ("Principal", "principal", TWO_PLACES),
    ("Extra Principal", "extra_principal", TWO_PLACES),
    ("Repair Costs", "repair_costs", TWO_PLACES),
    ("HOA", "hoa", TWO_PLACES),
    ("Taxes", "taxes", TWO_PLACES),
    ("Insurance", "insurance", TWO_PLACES),
    ("PMI", "pmi", TWO_PLACES),
    ("Actual Payment", "actual_payment", TWO_PLACES),
    ("Cost of Capital", "cost_of_capital", TWO_PLACES),
    ("Waste Cost", "waste_cost", TWO_PLACES),
    ("Cost", "cost", TWO_PLACES),
    ("Debt", "remaining_debt", TWO_PLACES),
    ("Interest Rate", "annual_interest_rate", FOUR_PLACES),
    ("House Cost", "house_value_at_month", TWO_PLACES),
    ("Equity", "equity_at_month", TWO_PLACES),
]

SUMMARY_FIELDS: list[tuple[str, str, Decimal | None]] = [
    ("Total Interest Paid", "total_interest_paid", TWO_PLACES),
    ("Total Principal Paid", "total_principal_paid", TWO_PLACES),
    ("Total Taxes Paid", "total_taxes_paid", TWO_PLACES),
    ("Total Insurance Paid", "total_insurance_paid", TWO_PLACES),
    ("Total Maintenance Paid", "total_maintenance_paid", TWO_PLACES),
    ("Total PMI Paid", "total_pmi_paid", TWO_PLACES),
    ("Total HOA Paid", "total_hoa_paid", TWO_PLACES),
    ("Total Payments", "total_payments", TWO_PLACES),
    ("Total Cost of Capital", "total_cost_of_capital", TWO_PLACES),
    ("Total Waste Cost", "total_waste_cost", TWO_PLACES),
    ("Final House Value", "final_house_value", TWO_PLACES),
    ("Final Equity", "final_equity", TWO_PLACES),
    ("Months to Payoff", "months_to_payoff", None),
    ("Effective Interest Rate", "effective_interest_rate", FOUR_PLACES),
]


def _fmt(value, places: Decimal | None) -> str:
    if places is None:
        return str(int(value))
    # Fixed-point, never scientific notation
    return f"{Decimal(value).quantize(places, ROUND_HALF_UP):f}"


def format_row(row: MonthlyRow) -> list[str]:
    return [_fmt(getattr(row, attr), places) for _, attr, places in ROW_COLUMNS]


def format_summary(summary: MortgageSummary) -> list[list[str]]:
    return [[label, _fmt(getattr(summary, attr), places)] for label, attr, places in SUMMARY_FIELDS]


def export_csv(
    path: str | Path,
    rows: Iterable[MonthlyRow],
    summary: MortgageSummary | None = None,
) -> Path:
    """Write rows (and the summary, if given) to path.

    Raises:
        ExportFailed: the destination could not be opened or written
    """
    path = Path(path)
    count = 0
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow([header for header, _, _ in ROW_COLUMNS])
            for row in rows:
                writer.writerow(format_row(row))
                count += 1

            if summary is not None:
                writer.writerow([])
                writer.writerow([SUMMARY_HEADER])
                writer.writerows(format_summary(summary))
    except OSError as e:
        logger.warning("Export to %s failed: %s", path, e)
        raise ExportFailed(str(path), e) from e

    logger.info("Exported %d rows to %s", count, path)
    return path


def read_csv_rows(path: str | Path) -> list[dict[str, Decimal]]:
    """Parse the row section of an export back into column -> value dicts."""
    results: list[dict[str, Decimal]] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        header = next(reader)
        for record in reader:
            if not record:
                break
            results.append({name: Decimal(value) for name, value in zip(header, record)})
    return results


def read_csv_summary(path: str | Path) -> dict[str, Decimal]:
    """Parse the summary section of an export; empty if the file has none."""
    summary: dict[str, Decimal] = {}
    in_summary = False
    with open(path, newline="", encoding="utf-8") as f:
        for record in csv.reader(f):
            if record == [SUMMARY_HEADER]:
                in_summary = True
            elif in_summary and len(record) == 2:
                summary[record[0]] = Decimal(record[1])
    return summary
