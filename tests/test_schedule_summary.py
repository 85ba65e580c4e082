"""
Schedule Summary Tests

Headline totals, per-category rows and the pandas views.
"""

import pytest

from costseg.logic.depreciation_schedule import compute_schedule
from costseg.logic.schedule_summary import (
    category_summaries,
    category_summary_dataframe,
    cumulative_totals,
    five_year_total,
    first_year_total,
    schedule_to_dataframe,
    summarize,
    ten_year_total,
    total_depreciable_basis,
)


@pytest.fixture
def five_year_only(make_inputs):
    """$100,000 entirely 5-year property, no elections."""
    return make_inputs(
        total_cost=100000,
        allocations={"5year": 100},
        use_bonus_depreciation=False,
    )


class TestWindowTotals:

    def test_five_year_only(self, five_year_only):
        schedule = compute_schedule(five_year_only)

        assert first_year_total(schedule) == pytest.approx(20000)
        # 20% + 32% + 19.2% + 11.52% + 11.52%
        assert five_year_total(schedule) == pytest.approx(94240)
        assert ten_year_total(schedule) == pytest.approx(100000)

    def test_windows_match_row_sums(self, make_inputs):
        schedule = compute_schedule(make_inputs())
        assert five_year_total(schedule) == pytest.approx(sum(r.total_depreciation for r in schedule.years[:5]))
        assert ten_year_total(schedule) == pytest.approx(sum(r.total_depreciation for r in schedule.years[:10]))

    def test_cumulative_totals(self, make_inputs):
        schedule = compute_schedule(make_inputs())
        running = cumulative_totals(schedule)

        assert len(running) == 40
        assert running[0] == pytest.approx(176424)
        assert running == sorted(running)
        assert running[-1] == pytest.approx(schedule.total_depreciation)


class TestSummarize:

    def test_reference_study(self, make_inputs):
        inputs = make_inputs()
        summary = summarize(compute_schedule(inputs), inputs)

        assert summary.first_year_total == pytest.approx(176424)
        assert summary.total_depreciable_basis == pytest.approx(850000)
        assert summary.first_year_pct == pytest.approx(17.6424)
        assert summary.depreciable_basis_pct == pytest.approx(85.0)

    def test_zero_cost_percentages(self, make_inputs):
        inputs = make_inputs(total_cost=0)
        summary = summarize(compute_schedule(inputs), inputs)

        assert summary.first_year_total == 0
        assert summary.first_year_pct == 0
        assert summary.depreciable_basis_pct == 0

    def test_depreciable_basis_excludes_land_only(self, make_inputs):
        inputs = make_inputs(allocations={"land": 25, "commercial": 50})
        assert total_depreciable_basis(inputs) == pytest.approx(750000)

    def test_to_dict_keys(self, make_inputs):
        inputs = make_inputs()
        data = summarize(compute_schedule(inputs), inputs).to_dict()
        assert set(data) == {
            "first_year_total", "five_year_total", "ten_year_total", "total_depreciable_basis",
            "first_year_pct", "five_year_pct", "ten_year_pct", "depreciable_basis_pct",
        }


class TestCategorySummaries:

    def test_only_allocated_categories(self, make_inputs):
        inputs = make_inputs()
        rows = category_summaries(compute_schedule(inputs), inputs)
        assert [row["category_id"] for row in rows] == ["land", "5year", "7year", "15year", "commercial"]

    def test_land_row(self, make_inputs):
        inputs = make_inputs()
        land = category_summaries(compute_schedule(inputs), inputs)[0]

        assert land["allocated_amount"] == pytest.approx(150000)
        assert land["first_year_depreciation"] == 0
        assert land["cumulative"] == 0

    def test_five_year_row(self, make_inputs):
        inputs = make_inputs()
        rows = {row["category_id"]: row for row in category_summaries(compute_schedule(inputs), inputs)}
        five = rows["5year"]

        assert five["allocation_pct"] == 8
        assert five["bonus"] == pytest.approx(48000)
        assert five["remaining_basis"] == pytest.approx(32000)
        assert five["first_year_depreciation"] == pytest.approx(54400)


class TestDataFrames:

    def test_schedule_columns(self, make_inputs):
        inputs = make_inputs()
        df = schedule_to_dataframe(compute_schedule(inputs), inputs)

        assert list(df.columns) == [
            "Year", "5-Year Property", "7-Year Property", "15-Year Property",
            "Commercial (39 yr)", "Total", "Cumulative",
        ]
        assert len(df) == 40
        assert df["Year"].iloc[0] == 2024
        assert df["5-Year Property"].iloc[0] == pytest.approx(54400)
        assert df["Cumulative"].iloc[-1] == pytest.approx(df["Total"].sum())

    def test_include_inactive(self, make_inputs):
        inputs = make_inputs()
        df = schedule_to_dataframe(compute_schedule(inputs), inputs, include_inactive=True)

        assert "Residential (27.5 yr)" in df.columns
        assert "Land (Non-Depreciable)" not in df.columns
        assert (df["Residential (27.5 yr)"] == 0).all()

    def test_category_summary_dataframe(self, make_inputs):
        inputs = make_inputs()
        df = category_summary_dataframe(compute_schedule(inputs), inputs)

        assert len(df) == 5
        assert "Bonus Depreciation" in df.columns
        five = df[df["Category ID"] == "5year"].iloc[0]
        assert five["Depreciable Basis"] == pytest.approx(32000)


class TestNonPositiveCost:

    def test_negative_cost_summary_is_zero(self, make_inputs):
        inputs = make_inputs(total_cost=-100000)
        schedule = compute_schedule(inputs)
        summary = summarize(schedule, inputs)

        assert schedule.total_depreciation == 0
        assert total_depreciable_basis(inputs) == 0
        assert summary.total_depreciable_basis == 0
        assert summary.depreciable_basis_pct == 0

    def test_negative_cost_category_rows_are_zero(self, make_inputs):
        inputs = make_inputs(total_cost=-100000)
        rows = category_summaries(compute_schedule(inputs), inputs)

        assert rows
        assert all(row["allocated_amount"] == 0 for row in rows)
