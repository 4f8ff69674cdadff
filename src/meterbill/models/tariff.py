"""Tariff slab and schedule models."""

from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from meterbill.exceptions.errors import InvalidTariffClassError

UNBOUNDED = Decimal("Infinity")


class TariffClass(str, Enum):
    """Selects which slab schedule applies to a consumption."""

    STANDARD = "standard"
    PROTECTED = "protected"

    @classmethod
    def parse(cls, value: "TariffClass | str") -> "TariffClass":
        """Convert a tariff class name to a member.

        Parameters
        ----------
        value : TariffClass | str
            Member or its string value

        Returns
        -------
        TariffClass
            Matching tariff class

        Raises
        ------
        InvalidTariffClassError
            If the value names no known tariff class
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            choices = ", ".join(member.value for member in cls)
            raise InvalidTariffClassError(
                f"Unknown tariff class {value!r}, expected one of: {choices}"
            ) from e


@dataclass(frozen=True)
class Slab:
    """A consumption tier billed at a flat rate.

    Attributes
    ----------
    upper_bound : Decimal
        Inclusive upper bound in units, ``UNBOUNDED`` for the remainder
    rate : Decimal
        Price per unit within the tier
    """

    upper_bound: Decimal
    rate: Decimal

    @property
    def is_unbounded(self) -> bool:
        return self.upper_bound == UNBOUNDED


@dataclass(frozen=True)
class TariffTier:
    """Slab expressed with both of its bounds."""

    lower_bound: Decimal
    upper_bound: Decimal
    rate: Decimal


@dataclass(frozen=True)
class TariffSchedule:
    """Ordered slabs for one tariff class.

    Bounds must be positive and strictly increasing. A schedule whose last
    slab is bounded leaves consumption above that bound unbilled.
    """

    tariff_class: TariffClass
    slabs: tuple[Slab, ...]

    def __post_init__(self):
        if not self.slabs:
            raise ValueError("Tariff schedule needs at least one slab")

        previous = Decimal(0)
        for index, slab in enumerate(self.slabs):
            if slab.upper_bound <= previous:
                raise ValueError(
                    f"Slab {index} bound {slab.upper_bound} does not exceed {previous}"
                )
            if slab.rate < 0:
                raise ValueError(f"Slab {index} has negative rate {slab.rate}")
            if slab.is_unbounded and index != len(self.slabs) - 1:
                raise ValueError("Only the last slab may be unbounded")
            previous = slab.upper_bound

    @property
    def max_billed_units(self) -> Decimal:
        """Highest consumption the schedule prices (``UNBOUNDED`` if none)."""
        return self.slabs[-1].upper_bound

    @property
    def tiers(self) -> Iterator[TariffTier]:
        lower = Decimal(0)
        for slab in self.slabs:
            yield TariffTier(lower_bound=lower, upper_bound=slab.upper_bound, rate=slab.rate)
            lower = slab.upper_bound
