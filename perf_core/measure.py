"""Measurement amounts (time, data) with unit conversion."""

from __future__ import annotations

import functools
from decimal import Decimal
from typing import ClassVar, TypeAlias, TypeVar


NumberInput: TypeAlias = Decimal | int | float | str

TAmount = TypeVar("TAmount", bound="Amount")


def to_decimal(value: object) -> Decimal:
    """Coerce a numeric value to Decimal without binary float noise."""
    if isinstance(value, bool):
        raise TypeError("amount value must be numeric, not bool")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        return Decimal(value)
    raise TypeError(f"amount value must be numeric, got {type(value).__name__}")


@functools.total_ordering
class Amount:
    """A decimal quantity expressed in one of a fixed set of units.

    Subclasses declare ``UNITS`` as a mapping from unit name to its factor
    relative to ``BASE_UNITS``. Two amounts are equal when their values in
    base units are equal, whatever units they were expressed in.
    """

    UNITS: ClassVar[dict[str, Decimal]] = {}
    BASE_UNITS: ClassVar[str] = ""

    __slots__ = ("value", "units")

    def __init__(self, value: NumberInput, units: str) -> None:
        if units not in self.UNITS:
            raise ValueError(f"Unknown units '{units}' for {type(self).__name__}")
        self.value: Decimal = to_decimal(value)
        self.units: str = units

    @classmethod
    def zero(cls: type[TAmount]) -> TAmount:
        return cls(0, cls.BASE_UNITS)

    def _base_value(self) -> Decimal:
        return self.value * self.UNITS[self.units]

    def to_units(self: TAmount, units: str) -> TAmount:
        if units not in self.UNITS:
            raise ValueError(f"Unknown units '{units}' for {type(self).__name__}")
        if units == self.units:
            return self
        return type(self)(self._base_value() / self.UNITS[units], units)

    def _check_same_kind(self, other: object) -> Amount:
        if not isinstance(other, Amount) or type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        return other

    def __add__(self: TAmount, other: object) -> TAmount:
        other_amount = self._check_same_kind(other)
        return type(self)(self.value + other_amount.to_units(self.units).value, self.units)

    def __sub__(self: TAmount, other: object) -> TAmount:
        other_amount = self._check_same_kind(other)
        return type(self)(self.value - other_amount.to_units(self.units).value, self.units)

    def __truediv__(self: TAmount, divisor: NumberInput) -> TAmount:
        return type(self)(self.value / to_decimal(divisor), self.units)

    def __abs__(self: TAmount) -> TAmount:
        return type(self)(abs(self.value), self.units)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Amount) or type(other) is not type(self):
            return NotImplemented
        return self._base_value() == other._base_value()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Amount) or type(other) is not type(self):
            return NotImplemented
        return self._base_value() < other._base_value()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._base_value()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!s}, {self.units!r})"

    def __str__(self) -> str:
        return f"{self.value:f} {self.units}"


class Duration(Amount):
    """An amount of elapsed time."""

    UNITS: ClassVar[dict[str, Decimal]] = {
        "ms": Decimal(1),
        "s": Decimal(1000),
        "min": Decimal(60_000),
        "h": Decimal(3_600_000),
    }
    BASE_UNITS: ClassVar[str] = "ms"

    __slots__ = ()

    @classmethod
    def millis(cls, value: NumberInput) -> Duration:
        return cls(value, "ms")

    @classmethod
    def seconds(cls, value: NumberInput) -> Duration:
        return cls(value, "s")

    @classmethod
    def minutes(cls, value: NumberInput) -> Duration:
        return cls(value, "min")

    @classmethod
    def hours(cls, value: NumberInput) -> Duration:
        return cls(value, "h")

    def to_millis(self) -> Decimal:
        return self.to_units("ms").value


class DataAmount(Amount):
    """An amount of memory or storage, using binary multiples."""

    UNITS: ClassVar[dict[str, Decimal]] = {
        "B": Decimal(1),
        "kB": Decimal(1024),
        "MB": Decimal(1024**2),
        "GB": Decimal(1024**3),
    }
    BASE_UNITS: ClassVar[str] = "B"

    __slots__ = ()

    @classmethod
    def bytes(cls, value: NumberInput) -> DataAmount:
        return cls(value, "B")

    @classmethod
    def kbytes(cls, value: NumberInput) -> DataAmount:
        return cls(value, "kB")

    @classmethod
    def mbytes(cls, value: NumberInput) -> DataAmount:
        return cls(value, "MB")

    @classmethod
    def gbytes(cls, value: NumberInput) -> DataAmount:
        return cls(value, "GB")

    def to_bytes(self) -> Decimal:
        return self.to_units("B").value
