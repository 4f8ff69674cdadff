"""Unit tests for the tariff bill calculator."""

import logging
from decimal import Decimal, getcontext

import pytest

from meterbill.exceptions.errors import InvalidConsumptionError, InvalidTariffClassError
from meterbill.models.tariff import TariffClass
from meterbill.services.billing import (
    advance_income_tax,
    calculate_bill,
    calculate_bill_breakdown,
    exact_context,
    get_schedule,
    to_units,
)


class TestCalculateBillTotals:
    """Tests for totals of the standard schedule."""

    @pytest.mark.parametrize(
        "units,expected",
        [
            (0, "557.08"),
            (100, "2566.08"),
            (150, "4222.33"),
            (200, "5878.58"),
            (201, "6433.04"),
            (250, "9101.33"),
            (463, "24949.66"),
            (464, "26907.44"),
            (700, "47336.64"),
            (800, "53190.55"),
        ],
    )
    def test_known_totals(self, units, expected):
        """Test totals at slab boundaries and around the tax cliff."""
        assert calculate_bill(units) == Decimal(expected)

    def test_zero_consumption_pays_fixed_charges(self):
        """Test that zero units still owe fixed charge, meter rent and MUCT."""
        bill = calculate_bill_breakdown(0)

        assert bill.energy_charge == 0
        assert bill.slabs == ()
        assert bill.total == Decimal("557.08")

    def test_fractional_consumption(self):
        """Test that fractional units are billed without float drift."""
        assert calculate_bill(50.5) == Decimal("1571.63")
        assert calculate_bill(Decimal("50.5")) == Decimal("1571.63")

    def test_total_has_two_decimals(self):
        """Test that the total is rounded to the minor unit."""
        assert calculate_bill(201).as_tuple().exponent == -2

    def test_default_tariff_is_standard(self):
        """Test that omitting the tariff class bills on the standard schedule."""
        assert calculate_bill(300) == calculate_bill(300, TariffClass.STANDARD)

    def test_tariff_class_accepts_string(self):
        """Test that tariff classes can be given by name."""
        assert calculate_bill(150, "protected") == calculate_bill(150, TariffClass.PROTECTED)

    def test_total_never_decreases(self):
        """Test that billing more units never costs less."""
        totals = [calculate_bill(units) for units in range(0, 1001, 7)]
        assert totals == sorted(totals)


class TestBillBreakdown:
    """Tests for individual bill components."""

    def test_breakdown_250_units(self):
        """Test every component for 250 units on the standard schedule."""
        bill = calculate_bill_breakdown(250)

        assert bill.energy_charge == Decimal("6050")
        assert bill.fixed_charge == Decimal("1000")
        assert bill.meter_rent == Decimal("7.08")
        assert bill.electricity_duty == Decimal("90.75")
        assert bill.gst == Decimal("1028.50")
        assert bill.fuel_price_adjustment == Decimal("500")
        assert bill.tr_surcharge == Decimal("250")
        assert bill.qtr_adjustment == Decimal("125")
        assert bill.muct == Decimal("50")
        assert bill.advance_income_tax == 0
        assert bill.total == Decimal("9101.33")

    def test_slab_lines(self):
        """Test that each touched slab gets one line with its share of units."""
        bill = calculate_bill_breakdown(250)

        assert [line.tier for line in bill.slabs] == [1, 2, 3]
        assert [line.units for line in bill.slabs] == [Decimal(100), Decimal(100), Decimal(50)]
        assert [line.amount for line in bill.slabs] == [
            Decimal("1400.00"),
            Decimal("2500.00"),
            Decimal("2150.00"),
        ]
        assert sum(line.amount for line in bill.slabs) == bill.energy_charge

    def test_energy_at_400_and_700(self):
        """Test cumulative energy charge at the flat 65.00 slabs."""
        assert calculate_bill_breakdown(400).energy_charge == Decimal("14700")
        assert calculate_bill_breakdown(700).energy_charge == Decimal("34200")

    def test_rate_drops_above_700(self):
        """Test that units above 700 are billed at 43.00."""
        bill = calculate_bill_breakdown(800)

        assert bill.slabs[-1].rate == Decimal("43.00")
        assert bill.slabs[-1].units == Decimal(100)
        assert bill.energy_charge == Decimal("38500")

    @pytest.mark.parametrize("units,expected", [(200, "500"), (Decimal("200.01"), "1000")])
    def test_fixed_charge_threshold(self, units, expected):
        """Test that the fixed charge switches above 200 units."""
        assert calculate_bill_breakdown(units).fixed_charge == Decimal(expected)

    def test_pre_tax_total(self):
        """Test that pre-tax total plus tax rounds to the total."""
        bill = calculate_bill_breakdown(464)

        assert bill.pre_tax_total == Decimal("25030.18")
        assert bill.advance_income_tax == bill.pre_tax_total * Decimal("0.075")


class TestProtectedTariff:
    """Tests for the protected schedule."""

    def test_matches_standard_up_to_200(self):
        """Test that both schedules agree within the protected slabs."""
        for units in (0, 50, 100, 150, 200):
            assert calculate_bill(units, TariffClass.PROTECTED) == calculate_bill(units)

    def test_units_above_200_unbilled(self, caplog):
        """Test that consumption above the last slab is reported, not billed."""
        with caplog.at_level(logging.WARNING, logger="meterbill.services.billing"):
            bill = calculate_bill_breakdown(300, TariffClass.PROTECTED)

        assert bill.energy_charge == Decimal("3900")
        assert bill.unbilled_units == Decimal(100)
        assert bill.fixed_charge == Decimal("1000")
        assert bill.total == Decimal("6728.58")
        assert "left unbilled" in caplog.text

    def test_standard_has_nothing_unbilled(self):
        """Test that the unbounded standard schedule bills every unit."""
        assert calculate_bill_breakdown(10_000).unbilled_units == 0


class TestAdvanceIncomeTax:
    """Tests for the advance income tax cliff."""

    def test_below_threshold(self):
        """Test that totals under 25000 owe no tax."""
        assert advance_income_tax(Decimal("24999.99")) == 0

    def test_at_threshold(self):
        """Test that the rate applies to the whole bill at exactly 25000."""
        assert advance_income_tax(Decimal("25000")) == Decimal("1875.000")

    def test_cliff_between_463_and_464(self):
        """Test the jump in total when the cliff is crossed."""
        assert calculate_bill_breakdown(463).advance_income_tax == 0
        assert calculate_bill_breakdown(464).advance_income_tax > 0
        assert calculate_bill(464) - calculate_bill(463) > Decimal("1900")


class TestLargeConsumption:
    """Tests for consumption too large for the default decimal precision."""

    def test_total_is_exact(self):
        """Test that 1e25 units are priced to the last minor unit."""
        total = calculate_bill(Decimal("1e25"))

        assert total == Decimal("585391250000000000000006359.25")
        assert total.as_tuple().exponent == -2

    def test_float_input(self):
        """Test that a huge float is billed rather than failing to round."""
        assert calculate_bill(1e25) == Decimal("585391250000000000000006359.25")

    def test_protected_surplus_is_unbilled(self):
        """Test that the protected schedule stays capped for huge consumption."""
        bill = calculate_bill_breakdown(Decimal("1e25"), TariffClass.PROTECTED)

        assert bill.unbilled_units == Decimal("1e25") - 200
        assert bill.energy_charge == Decimal(3900)

    def test_global_context_untouched(self):
        """Test that billing leaves the caller's decimal context as it was."""
        before = getcontext().prec
        calculate_bill(Decimal("1e40"))
        assert getcontext().prec == before


class TestRepeatability:
    """Tests that the same input always produces the same bill."""

    @pytest.mark.parametrize("tariff_class", list(TariffClass))
    @pytest.mark.parametrize("units", [0, 50.5, 463.7, 800, Decimal("463.7")])
    def test_same_result_twice(self, tariff_class, units):
        """Test that repeated calls agree in value and representation."""
        first = calculate_bill(units, tariff_class)
        second = calculate_bill(units, tariff_class)

        assert first == second
        assert first.as_tuple() == second.as_tuple()

    def test_breakdown_repeatable(self):
        """Test that the whole breakdown is identical across calls."""
        assert calculate_bill_breakdown(463.7) == calculate_bill_breakdown(463.7)


class TestInvalidInput:
    """Tests for rejected consumption values and tariff classes."""

    @pytest.mark.parametrize("units", [-1, -0.01, Decimal("-5")])
    def test_negative_units(self, units):
        """Test that negative consumption is rejected."""
        with pytest.raises(InvalidConsumptionError):
            calculate_bill(units)

    @pytest.mark.parametrize("units", [float("nan"), float("inf"), Decimal("NaN"), Decimal("Infinity")])
    def test_non_finite_units(self, units):
        """Test that NaN and infinity are rejected."""
        with pytest.raises(InvalidConsumptionError):
            calculate_bill(units)

    @pytest.mark.parametrize("units", ["100", None, True, [100]])
    def test_non_numeric_units(self, units):
        """Test that values that are not real numbers are rejected."""
        with pytest.raises(InvalidConsumptionError):
            calculate_bill(units)

    def test_invalid_consumption_is_value_error(self):
        """Test that callers can catch consumption errors as ValueError."""
        with pytest.raises(ValueError):
            calculate_bill(-1)

    def test_unknown_tariff_class(self):
        """Test that unknown tariff classes are rejected."""
        with pytest.raises(InvalidTariffClassError):
            calculate_bill(100, "commercial")


class TestHelpers:
    """Tests for unit conversion and schedule lookup."""

    def test_to_units_float_uses_shortest_repr(self):
        """Test that floats convert through their decimal representation."""
        assert to_units(0.1) == Decimal("0.1")

    def test_to_units_int(self):
        """Test that integers convert exactly."""
        assert to_units(463) == Decimal(463)

    def test_get_schedule(self):
        """Test schedule lookup by member and by name."""
        assert get_schedule("standard").tariff_class is TariffClass.STANDARD
        assert get_schedule(TariffClass.PROTECTED).max_billed_units == Decimal(200)

    def test_exact_context_widens_precision(self):
        """Test that the context grows with the operands' digits."""
        context = exact_context(Decimal("1e60"), Decimal("0.5"))
        assert context.prec >= 100
