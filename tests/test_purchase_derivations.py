"""Coupled purchase inputs (notary fees, standard loan, target price, holding years)."""

from __future__ import annotations

import datetime as dt

import pytest

from immosim.core import purchase_derivations as pdv
from immosim.core.defaults import default_params

TODAY = dt.date(2026, 6, 1)


@pytest.fixture
def base():
    return default_params(today=TODAY)


class TestNotary:
    def test_amount_from_percent(self) -> None:
        assert pdv.notary_fees(286_000, 7.5) == 21_450

    def test_property_type_switch(self, base) -> None:
        neuf = pdv.with_property_type(base, "neuf")
        assert neuf.notary_fees_percent == 2.5
        assert neuf.notary_fees == 7_150
        back = pdv.with_property_type(neuf, "ancien")
        assert back.notary_fees_percent == 7.5
        assert back.notary_fees == 21_450

    def test_amount_edit_updates_percent(self, base) -> None:
        p = pdv.with_notary_amount(base, 20_000)
        assert p.notary_fees == 20_000
        assert p.notary_fees_percent == pytest.approx(6.99)

    def test_percent_edit_updates_amount(self, base) -> None:
        p = pdv.with_notary_percent(base, 3.0)
        assert p.notary_fees == 8_580


class TestStandardLoan:
    def test_amount_never_negative(self) -> None:
        assert pdv.standard_loan_amount(100_000, 90_000, 20_000, 0) == 0.0

    def test_price_change_rederives_loan_and_notary(self, base) -> None:
        p = pdv.with_property_price(base, 300_000)
        assert p.property_price == 300_000
        assert p.notary_fees == 22_500
        assert p.loan(pdv.STANDARD_LOAN_ID).amount == pytest.approx(300_000 - 25_000 - 75_600 - 15_000)
        assert p.loan(pdv.PTZ_LOAN_ID) == base.loan(pdv.PTZ_LOAN_ID)

    def test_contribution_change(self, base) -> None:
        p = pdv.with_personal_contribution(base, 50_000)
        assert p.personal_contribution == 50_000
        assert p.loan(pdv.STANDARD_LOAN_ID).amount == pytest.approx(286_000 - 50_000 - 75_600 - 15_000)

    def test_rate_change_only_touches_standard(self, base) -> None:
        p = pdv.with_standard_rate(base, 3.5)
        assert p.loan(pdv.STANDARD_LOAN_ID).rate == 3.5
        assert p.loan(pdv.BOOST_LOAN_ID).rate == 0.0

    def test_inputs_are_not_mutated(self, base) -> None:
        pdv.with_property_price(base, 400_000)
        assert base.property_price == 286_000
        assert base.loan(pdv.STANDARD_LOAN_ID).amount == 169_950


class TestTargetPrice:
    def test_sets_appreciation(self, base) -> None:
        p = pdv.with_target_price(base, 286_000 * 1.02**10, 10)
        assert p.property_appreciation == pytest.approx(2.0)

    def test_zero_years_is_noop(self, base) -> None:
        assert pdv.with_target_price(base, 400_000, 0) is base


class TestHoldingYears:
    def test_rounded_years(self) -> None:
        assert pdv.holding_years_since("2019-06-01", today=TODAY) == 7

    def test_accepts_date_objects(self) -> None:
        assert pdv.holding_years_since(dt.date(2016, 5, 1), today=TODAY) == 10

    @pytest.mark.parametrize("when", ["2027-01-01", "2026-06-01", "1990-01-01", "not a date", "2026-05-01"])
    def test_out_of_range_or_invalid(self, when: str) -> None:
        assert pdv.holding_years_since(when, today=TODAY) is None
