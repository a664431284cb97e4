from dataclasses import replace
from decimal import Decimal

import pytest

from homebuyer.engine.amortization import monthly_payment, run_amortization, yearly_summary
from homebuyer.models.parameters import Absolute, Percentage


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        pmt = monthly_payment(Decimal("400000"), Decimal("0.07"), 30)
        assert pmt.quantize(Decimal("0.01")) == Decimal("2661.21")

    def test_canonical_loan(self):
        """$240K loan at 6% for 30 years."""
        pmt = monthly_payment(Decimal("240000"), Decimal("0.06"), 30)
        assert pmt.quantize(Decimal("0.01")) == Decimal("1438.92")

    def test_zero_rate_is_straight_line(self):
        pmt = monthly_payment(Decimal("360000"), Decimal("0"), 30)
        assert pmt == Decimal("1000")

    def test_rate_lost_in_precision_is_straight_line(self):
        """1 + r rounds to exactly 1 at the default 28-digit context."""
        pmt = monthly_payment(Decimal("360000"), Decimal("1E-28"), 30)
        assert pmt == Decimal("1000")

    def test_zero_principal(self):
        pmt = monthly_payment(Decimal("0"), Decimal("0.07"), 30)
        assert pmt == Decimal("0")


class TestCanonicalScenario:
    def test_runs_full_term(self, canonical_params):
        result = run_amortization(canonical_params)
        assert len(result.rows) == 360
        assert result.summary.months_to_payoff == 360

    def test_total_interest(self, canonical_params):
        result = run_amortization(canonical_params)
        pmt = float(result.summary.monthly_payment)
        total_interest = float(result.summary.total_interest_paid)
        assert total_interest == pytest.approx(pmt * 360 - 240000, abs=0.05)
        assert 278000 < total_interest < 278100

    def test_final_debt_is_zero(self, canonical_params):
        result = run_amortization(canonical_params)
        assert result.rows[-1].remaining_debt == 0
        assert result.final_debt == 0

    def test_first_payment_mostly_interest(self, canonical_params):
        result = run_amortization(canonical_params)
        first = result.rows[0]
        # 240000 * 0.06 / 12
        assert first.interest == Decimal("1200")
        assert float(first.principal) == pytest.approx(238.92, abs=0.01)

    def test_no_pmi_at_twenty_percent_down(self, canonical_params):
        params = replace(canonical_params, pmi=Absolute(Decimal("100")))
        result = run_amortization(params)
        assert all(row.pmi == 0 for row in result.rows)
        assert result.summary.total_pmi_paid == 0

    def test_deterministic(self, canonical_params):
        assert run_amortization(canonical_params) == run_amortization(canonical_params)


class TestScheduleInvariants:
    @pytest.fixture(params=["canonical_params", "full_cost_params"])
    def result(self, request):
        return run_amortization(request.getfixturevalue(request.param))

    def test_months_consecutive_from_one(self, result):
        assert [row.month for row in result.rows] == list(range(1, len(result.rows) + 1))

    def test_debt_non_increasing(self, result):
        for prev, row in zip(result.rows, result.rows[1:]):
            assert row.remaining_debt <= prev.remaining_debt

    def test_paid_off_within_horizon(self, result):
        assert len(result.rows) <= 360
        assert result.rows[-1].remaining_debt <= 0

    def test_principal_sums_to_loan(self, result):
        paid = sum(row.total_principal for row in result.rows)
        expected = result.summary.loan_amount - result.rows[-1].remaining_debt
        assert float(paid) == pytest.approx(float(expected), abs=1e-6)

    def test_cost_excludes_principal(self, result):
        for row in result.rows:
            assert row.cost == row.actual_payment - row.principal - row.extra_principal + row.cost_of_capital

    def test_waste_is_non_principal_outflow(self, result):
        for row in result.rows:
            assert row.waste_cost == (
                row.interest + row.repair_costs + row.hoa + row.taxes
                + row.insurance + row.pmi + row.cost_of_capital
            )

    def test_summary_sums_rows(self, result):
        s = result.summary
        assert s.total_interest_paid == sum(r.interest for r in result.rows)
        assert s.total_taxes_paid == sum(r.taxes for r in result.rows)
        assert s.total_payments == sum(r.actual_payment for r in result.rows)
        assert s.total_waste_cost == sum(r.waste_cost for r in result.rows)


class TestZeroRate:
    def test_straight_line_schedule(self, canonical_params):
        params = replace(
            canonical_params,
            house_value=Decimal("450000"),
            annual_interest_rate=Decimal("0"),
        )
        result = run_amortization(params)
        assert result.summary.monthly_payment == Decimal("1000")
        assert result.summary.total_interest_paid == 0
        assert result.summary.months_to_payoff == 360
        assert all(row.principal == Decimal("1000") for row in result.rows)

    def test_no_cost_of_capital(self, canonical_params):
        params = replace(canonical_params, annual_interest_rate=Decimal("0"))
        result = run_amortization(params)
        assert result.summary.total_cost_of_capital == 0


class TestExtraPrincipal:
    def test_shortens_loan_and_saves_interest(self, canonical_params):
        base = run_amortization(canonical_params)
        extra = run_amortization(replace(canonical_params, extra_monthly_principal=Decimal("500")))
        assert extra.summary.months_to_payoff < base.summary.months_to_payoff
        assert extra.summary.total_interest_paid < base.summary.total_interest_paid

    def test_last_month_never_overpays(self, canonical_params):
        result = run_amortization(replace(canonical_params, extra_monthly_principal=Decimal("700")))
        last = result.rows[-1]
        assert last.remaining_debt == 0
        assert last.principal >= 0
        assert last.extra_principal <= Decimal("700")

    def test_extra_larger_than_loan(self, canonical_params):
        params = replace(
            canonical_params,
            down_payment=Absolute(Decimal("299500")),
            extra_monthly_principal=Decimal("1000"),
        )
        result = run_amortization(params)
        assert len(result.rows) == 1
        row = result.rows[0]
        assert row.extra_principal == Decimal("500")
        assert row.principal == 0
        assert row.remaining_debt == 0


class TestRecurringCosts:
    def test_percentage_costs_track_appreciated_value(self, full_cost_params):
        result = run_amortization(full_cost_params)
        first = result.rows[0]
        # 400000 * (1 + 0.03/12)
        assert first.house_value_at_month == Decimal("401000")
        assert first.taxes == Decimal("401000") * Decimal("0.02") / 12
        assert first.insurance == Decimal("401000") * Decimal("0.0035") / 12

    def test_absolute_costs_are_flat(self, full_cost_params):
        result = run_amortization(full_cost_params)
        assert all(row.repair_costs == Decimal("300") for row in result.rows)
        assert all(row.hoa == Decimal("150") for row in result.rows)

    def test_taxes_grow_with_appreciation(self, full_cost_params):
        result = run_amortization(full_cost_params)
        assert result.rows[-1].taxes > result.rows[0].taxes

    def test_negative_appreciation(self, full_cost_params):
        params = replace(full_cost_params, annual_appreciation_rate=Decimal("-0.02"))
        result = run_amortization(params)
        assert result.summary.final_house_value < params.house_value
        assert result.rows[-1].taxes < result.rows[0].taxes

    def test_equity_uses_balance_before_payment(self, full_cost_params):
        result = run_amortization(full_cost_params)
        first = result.rows[0]
        assert first.equity_at_month == Decimal("401000") - Decimal("360000")
        assert first.cost_of_capital == first.equity_at_month * Decimal("0.065") / 12

    def test_final_equity(self, full_cost_params):
        result = run_amortization(full_cost_params)
        s = result.summary
        assert s.final_equity == s.final_house_value - result.rows[-1].remaining_debt


class TestPMI:
    def test_percentage_pmi_follows_declining_balance(self, full_cost_params):
        """Eligibility is fixed at origination; the amount floats with the balance."""
        result = run_amortization(full_cost_params)
        first, second = result.rows[0], result.rows[1]
        # 360000 * 0.005 / 12
        assert first.pmi == Decimal("150")
        assert second.pmi < first.pmi

    def test_pmi_charged_for_whole_loan(self, full_cost_params):
        """Crossing 20% equity mid-loan does not switch PMI off."""
        result = run_amortization(full_cost_params)
        assert all(row.pmi > 0 for row in result.rows)

    def test_fixed_monthly_pmi(self, full_cost_params):
        params = replace(full_cost_params, pmi=Absolute(Decimal("95")))
        result = run_amortization(params)
        assert all(row.pmi == Decimal("95") for row in result.rows)

    def test_pmi_threshold_from_absolute_down_payment(self, full_cost_params):
        params = replace(full_cost_params, down_payment=Absolute(Decimal("80000")))
        result = run_amortization(params)
        assert result.summary.total_pmi_paid == 0


class TestEdgeCases:
    def test_all_cash_purchase(self, canonical_params):
        params = replace(canonical_params, down_payment=Percentage(Decimal("1")))
        result = run_amortization(params)
        assert result.rows == ()
        assert result.summary.months_to_payoff == 0
        assert result.summary.effective_interest_rate == 0
        assert result.summary.final_house_value == Decimal("300000")
        assert result.summary.final_equity == Decimal("300000")

    def test_shorter_term(self, canonical_params):
        result = run_amortization(replace(canonical_params, loan_term_years=15))
        assert len(result.rows) == 180
        assert result.rows[-1].remaining_debt == 0

    def test_term_longer_than_horizon_stops_at_cap(self, canonical_params):
        result = run_amortization(replace(canonical_params, loan_term_years=40))
        assert len(result.rows) == 360
        assert result.rows[-1].remaining_debt > 0

    def test_custom_horizon(self, canonical_params):
        result = run_amortization(canonical_params, max_months=24)
        assert len(result.rows) == 24

    def test_zero_horizon_projects_nothing(self, canonical_params):
        result = run_amortization(canonical_params, max_months=0)
        assert result.rows == ()
        assert result.summary.months_to_payoff == 0
        # Debt still outstanding counts against equity
        assert result.summary.final_equity == Decimal("60000")

    def test_effective_rate_is_annualized_ratio(self, canonical_params):
        s = run_amortization(canonical_params).summary
        expected = (s.total_interest_paid / s.total_principal_paid) * (Decimal(12) / 360)
        assert s.effective_interest_rate == expected


class TestYearlySummary:
    def test_one_entry_per_year(self, canonical_params):
        yearly = yearly_summary(run_amortization(canonical_params))
        assert len(yearly) == 30
        assert [int(y["year"]) for y in yearly] == list(range(1, 31))

    def test_partial_final_year(self, canonical_params):
        result = run_amortization(replace(canonical_params, extra_monthly_principal=Decimal("500")))
        yearly = yearly_summary(result)
        assert len(yearly) == (result.summary.months_to_payoff + 11) // 12
        assert yearly[-1]["ending_balance"] == 0

    def test_totals_match(self, full_cost_params):
        result = run_amortization(full_cost_params)
        yearly = yearly_summary(result)
        assert float(sum(y["interest"] for y in yearly)) == pytest.approx(
            float(result.summary.total_interest_paid)
        )
        assert float(sum(y["payments"] for y in yearly)) == pytest.approx(
            float(result.summary.total_payments)
        )
