"""Unit tests for tariff schedule models."""

from decimal import Decimal

import pytest

from meterbill.config.constants import PROTECTED_TARIFF, STANDARD_TARIFF, TARIFF_SCHEDULES
from meterbill.exceptions.errors import InvalidTariffClassError
from meterbill.models.tariff import UNBOUNDED, Slab, TariffClass, TariffSchedule


class TestTariffClass:
    """Tests for tariff class parsing."""

    def test_parse_member(self):
        """Test that members pass through unchanged."""
        assert TariffClass.parse(TariffClass.PROTECTED) is TariffClass.PROTECTED

    def test_parse_name(self):
        """Test parsing from the string value."""
        assert TariffClass.parse("standard") is TariffClass.STANDARD

    def test_parse_unknown(self):
        """Test that unknown names raise with the allowed choices."""
        with pytest.raises(InvalidTariffClassError, match="standard, protected"):
            TariffClass.parse("industrial")

    def test_is_string(self):
        """Test that members compare equal to their values."""
        assert TariffClass.STANDARD == "standard"


class TestScheduleConstants:
    """Tests for the configured schedules."""

    def test_every_class_has_a_schedule(self):
        """Test that each tariff class maps to its own schedule."""
        for tariff_class in TariffClass:
            assert TARIFF_SCHEDULES[tariff_class].tariff_class is tariff_class

    def test_standard_tiers(self):
        """Test standard slab bounds and rates."""
        tiers = list(STANDARD_TARIFF.tiers)

        assert [tier.lower_bound for tier in tiers] == [0, 100, 200, 300, 400, 700]
        assert [tier.upper_bound for tier in tiers][:-1] == [100, 200, 300, 400, 700]
        assert tiers[-1].upper_bound == UNBOUNDED
        assert [tier.rate for tier in tiers] == [
            Decimal("14.00"),
            Decimal("25.00"),
            Decimal("43.00"),
            Decimal("65.00"),
            Decimal("65.00"),
            Decimal("43.00"),
        ]

    def test_standard_is_unbounded(self):
        """Test that the standard schedule prices any consumption."""
        assert STANDARD_TARIFF.max_billed_units == UNBOUNDED
        assert STANDARD_TARIFF.slabs[-1].is_unbounded

    def test_protected_stops_at_200(self):
        """Test that the protected schedule has two bounded slabs."""
        assert len(PROTECTED_TARIFF.slabs) == 2
        assert PROTECTED_TARIFF.max_billed_units == Decimal(200)
        assert not PROTECTED_TARIFF.slabs[-1].is_unbounded


class TestScheduleValidation:
    """Tests for schedule construction checks."""

    def test_empty_schedule(self):
        """Test that a schedule needs slabs."""
        with pytest.raises(ValueError, match="at least one slab"):
            TariffSchedule(TariffClass.STANDARD, ())

    def test_bounds_must_increase(self):
        """Test that slab bounds must be strictly increasing."""
        with pytest.raises(ValueError, match="does not exceed"):
            TariffSchedule(
                TariffClass.STANDARD,
                (Slab(Decimal(100), Decimal(1)), Slab(Decimal(100), Decimal(2))),
            )

    def test_negative_rate(self):
        """Test that rates cannot be negative."""
        with pytest.raises(ValueError, match="negative rate"):
            TariffSchedule(TariffClass.STANDARD, (Slab(Decimal(100), Decimal(-1)),))

    def test_unbounded_slab_must_be_last(self):
        """Test that only the final slab may be unbounded."""
        with pytest.raises(ValueError):
            TariffSchedule(
                TariffClass.STANDARD,
                (Slab(UNBOUNDED, Decimal(1)), Slab(Decimal(100), Decimal(2))),
            )

    def test_schedule_is_frozen(self):
        """Test that schedules cannot be modified after creation."""
        with pytest.raises(AttributeError):
            STANDARD_TARIFF.slabs = ()
