"""Immutable decimal-exact value objects: Percentage and Money"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from factoring_simulator.domain.enums import Currency
from factoring_simulator.domain.exceptions import CurrencyMismatchError, ValidationError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
HUNDRED = Decimal(100)
MAX_PERCENTAGE = Decimal(10)  # 1000%


def to_decimal(value: Number) -> Decimal:
    """Convert a plain number to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Not a number: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Not a number: {value!r}")


@dataclass(frozen=True)
class Percentage:
    """
    Percentage stored as a decimal fraction (0.05 means 5%).

    Valid range is 0 to 10 (1000%); anything outside raises ValidationError.
    Use from_percentage(5) or from_decimal("0.05") to build one.
    """

    value: Decimal

    def __post_init__(self) -> None:
        value = to_decimal(self.value)
        if not value.is_finite():
            raise ValidationError("Percentage must be a finite number")
        if value < 0:
            raise ValidationError("Percentage cannot be negative")
        if value > MAX_PERCENTAGE:
            raise ValidationError("Percentage value seems unrealistic")
        object.__setattr__(self, "value", value)

    @classmethod
    def from_percentage(cls, value: Number) -> Percentage:
        """5 -> 5%"""
        return cls(to_decimal(value) / HUNDRED)

    @classmethod
    def from_decimal(cls, value: Number) -> Percentage:
        """0.05 -> 5%"""
        return cls(to_decimal(value))

    def to_decimal(self) -> Decimal:
        return self.value

    def to_percentage_value(self) -> Decimal:
        return self.value * HUNDRED

    def add(self, other: Percentage) -> Percentage:
        return Percentage(self.value + other.value)

    def subtract(self, other: Percentage) -> Percentage:
        return Percentage(self.value - other.value)

    def multiply(self, factor: Number) -> Percentage:
        return Percentage(self.value * to_decimal(factor))

    def is_greater_than(self, other: Percentage) -> bool:
        return self.value > other.value

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply

    def __str__(self) -> str:
        return f"{self.to_percentage_value():.2f}%"


@dataclass(frozen=True)
class Money:
    """
    Currency amount with at most 2 decimal places.

    Extra precision passed to the constructor is rounded half-up, so every
    arithmetic result is already at cent precision. Operations between two
    Money values require the same currency.
    """

    amount: Decimal
    currency: Currency = Currency.BRL

    def __post_init__(self) -> None:
        amount = to_decimal(self.amount)
        if not amount.is_finite():
            raise ValidationError("Money amount must be a finite number")
        if amount.as_tuple().exponent < -2:
            amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        try:
            currency = Currency(self.currency)
        except ValueError:
            raise ValidationError(f"Unsupported currency: {self.currency!r}")
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def zero(cls, currency: Currency = Currency.BRL) -> Money:
        return cls(Decimal(0), currency)

    def add(self, other: Money) -> Money:
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._ensure_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Union[Number, Percentage]) -> Money:
        if isinstance(factor, Percentage):
            multiplier = factor.to_decimal()
        else:
            multiplier = to_decimal(factor)
        return Money(self.amount * multiplier, self.currency)

    def divide(self, divisor: Number) -> Money:
        divisor = to_decimal(divisor)
        if divisor == 0:
            raise ValidationError("Cannot divide money by zero")
        return Money(self.amount / divisor, self.currency)

    def round_to_tax_standard(self) -> Money:
        """Brazilian fiscal rounding: half-up to the cent"""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def is_greater_than(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def is_greater_than_or_equal(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount >= other.amount

    def is_less_than(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def is_less_than_or_equal(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount <= other.amount

    def is_equal_to(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount == other.amount

    def is_positive(self) -> bool:
        return self.amount > 0

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide
    __gt__ = is_greater_than
    __ge__ = is_greater_than_or_equal
    __lt__ = is_less_than
    __le__ = is_less_than_or_equal

    def _ensure_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot operate on different currencies: {self.currency.value} and {other.currency.value}"
            )

    def __str__(self) -> str:
        return f"{self.currency.value} {self.amount:.2f}"
