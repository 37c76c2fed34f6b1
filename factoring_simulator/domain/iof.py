"""IOF (Imposto sobre Operações Financeiras) for factoring operations

Legislation treats factoring as a credit activity, so IOF applies even though
factoring companies are not financial institutions. The seller of the
receivable is the taxpayer; the factoring company withholds and remits it.
Rates follow Instrução Normativa RFB 1.543/2015.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict

from factoring_simulator.domain.enums import IOFEntityType
from factoring_simulator.domain.money import Money, Percentage

MAX_IOF_DAYS = 365


@dataclass(frozen=True)
class IOFRates:
    daily_rate: Percentage
    fixed_rate: Percentage


IOF_RATES: Dict[IOFEntityType, IOFRates] = {
    IOFEntityType.INDIVIDUAL: IOFRates(
        daily_rate=Percentage.from_percentage("0.0082"),
        fixed_rate=Percentage.from_percentage("0.38"),
    ),
    IOFEntityType.LEGAL_ENTITY: IOFRates(
        daily_rate=Percentage.from_percentage("0.0041"),
        fixed_rate=Percentage.from_percentage("0.38"),
    ),
    IOFEntityType.SMALL_SIMPLIFIED: IOFRates(
        daily_rate=Percentage.from_percentage("0.00137"),
        fixed_rate=Percentage.from_percentage("0.38"),
    ),
}

ENTITY_TYPE_LABELS: Dict[IOFEntityType, str] = {
    IOFEntityType.INDIVIDUAL: "Pessoa Física",
    IOFEntityType.LEGAL_ENTITY: "Pessoa Jurídica",
    IOFEntityType.SMALL_SIMPLIFIED: "Simples Nacional (< R$ 30k)",
}


@dataclass(frozen=True)
class IOFCalculation:
    """
    Blended daily-accrual plus fixed-rate IOF.

    Requirements:
    - Base is the net amount paid to the seller
    - Days are capped at 365
    - daily = base * daily_rate * days, fixed = base * fixed_rate,
      each rounded half-up, total = daily + fixed
    """

    tax_base: Money
    days_until_maturity: int
    entity_type: IOFEntityType = IOFEntityType.LEGAL_ENTITY

    daily_rate: Percentage = field(init=False)
    fixed_rate: Percentage = field(init=False)
    daily_iof: Money = field(init=False)
    fixed_iof: Money = field(init=False)
    total_iof_amount: Money = field(init=False)
    effective_iof_rate: Percentage = field(init=False)

    def __post_init__(self) -> None:
        days = min(int(self.days_until_maturity), MAX_IOF_DAYS)
        rates = IOF_RATES[self.entity_type]

        # Accumulate on the raw base before converting back to Money
        daily_decimal = self.tax_base.amount * rates.daily_rate.to_decimal() * Decimal(days)
        daily_iof = Money(daily_decimal, self.tax_base.currency).round_to_tax_standard()
        fixed_iof = self.tax_base.multiply(rates.fixed_rate).round_to_tax_standard()
        total = daily_iof.add(fixed_iof).round_to_tax_standard()

        if self.tax_base.amount > 0:
            effective = Percentage.from_decimal(total.amount / self.tax_base.amount)
        else:
            effective = Percentage.from_decimal(0)

        object.__setattr__(self, "days_until_maturity", days)
        object.__setattr__(self, "daily_rate", rates.daily_rate)
        object.__setattr__(self, "fixed_rate", rates.fixed_rate)
        object.__setattr__(self, "daily_iof", daily_iof)
        object.__setattr__(self, "fixed_iof", fixed_iof)
        object.__setattr__(self, "total_iof_amount", total)
        object.__setattr__(self, "effective_iof_rate", effective)

    @property
    def entity_type_label(self) -> str:
        return ENTITY_TYPE_LABELS[self.entity_type]

    def breakdown(self) -> Dict[str, Any]:
        """Display breakdown, rates expressed as percent values"""
        return {
            "tax_base": self.tax_base.amount,
            "entity_type": self.entity_type_label,
            "days_until_maturity": self.days_until_maturity,
            "daily_rate": self.daily_rate.to_percentage_value(),
            "fixed_rate": self.fixed_rate.to_percentage_value(),
            "daily_iof": self.daily_iof.amount,
            "fixed_iof": self.fixed_iof.amount,
            "total_iof": self.total_iof_amount.amount,
            "effective_rate": self.effective_iof_rate.to_percentage_value(),
        }
