"""Tax calculators for factoring revenue (ISS, PIS, COFINS, IRPJ, CSLL) and their aggregate

All five levies are based on the deságio amount, i.e. the factoring
company's service-fee revenue, never on the receivable's face value.
"""

from dataclasses import dataclass, field
from typing import Optional

from factoring_simulator.domain.enums import ContributionRegime, IOFEntityType, TaxRegime
from factoring_simulator.domain.iof import IOFCalculation
from factoring_simulator.domain.money import Money, Percentage

DEFAULT_ISS_RATE = Percentage.from_percentage("3.0")
PIS_NON_CUMULATIVE_RATE = Percentage.from_percentage("1.65")
COFINS_NON_CUMULATIVE_RATE = Percentage.from_percentage("7.6")
PRESUMED_PROFIT_PERCENTAGE = Percentage.from_percentage("32")
IRPJ_RATE = Percentage.from_percentage("15")
CSLL_RATE = Percentage.from_percentage("9")


@dataclass(frozen=True)
class Municipality:
    """Municipality where ISS is due (IBGE code)"""

    code: str
    name: str
    iss_rate_for_factoring: Optional[Percentage] = None


@dataclass(frozen=True)
class ISSCalculation:
    """Municipal services tax on the deságio"""

    tax_base: Money
    municipality: Municipality
    tax_rate: Percentage = field(init=False)
    tax_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        rate = self.municipality.iss_rate_for_factoring or DEFAULT_ISS_RATE
        object.__setattr__(self, "tax_rate", rate)
        object.__setattr__(self, "tax_amount", self.tax_base.multiply(rate).round_to_tax_standard())


@dataclass(frozen=True)
class PISCalculation:
    """
    PIS contribution on the deságio.

    Lei 9.718/98 bars factoring companies from Simples Nacional and Lucro
    Presumido, so the non-cumulative rate always applies. The tax regime is
    accepted for symmetry with the other calculators.
    """

    tax_base: Money
    tax_regime: TaxRegime = TaxRegime.LUCRO_REAL
    regime: ContributionRegime = field(init=False, default=ContributionRegime.NON_CUMULATIVE)
    tax_rate: Percentage = field(init=False, default=PIS_NON_CUMULATIVE_RATE)
    tax_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tax_amount", self.tax_base.multiply(self.tax_rate).round_to_tax_standard())


@dataclass(frozen=True)
class COFINSCalculation:
    """COFINS contribution on the deságio, always non-cumulative (see PISCalculation)"""

    tax_base: Money
    tax_regime: TaxRegime = TaxRegime.LUCRO_REAL
    regime: ContributionRegime = field(init=False, default=ContributionRegime.NON_CUMULATIVE)
    tax_rate: Percentage = field(init=False, default=COFINS_NON_CUMULATIVE_RATE)
    tax_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tax_amount", self.tax_base.multiply(self.tax_rate).round_to_tax_standard())


def _presumed_profit(tax_base: Money) -> Money:
    return tax_base.multiply(PRESUMED_PROFIT_PERCENTAGE)


@dataclass(frozen=True)
class IRPJCalculation:
    """Corporate income tax: 15% over a 32% presumed profit on the deságio"""

    tax_base: Money
    tax_regime: TaxRegime = TaxRegime.LUCRO_REAL
    presumed_profit_percentage: Percentage = field(init=False, default=PRESUMED_PROFIT_PERCENTAGE)
    taxable_profit: Money = field(init=False)
    tax_rate: Percentage = field(init=False, default=IRPJ_RATE)
    tax_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        taxable_profit = _presumed_profit(self.tax_base)
        object.__setattr__(self, "taxable_profit", taxable_profit)
        object.__setattr__(self, "tax_amount", taxable_profit.multiply(self.tax_rate).round_to_tax_standard())


@dataclass(frozen=True)
class CSLLCalculation:
    """Social contribution on net profit: 9% over the same presumed profit"""

    tax_base: Money
    tax_regime: TaxRegime = TaxRegime.LUCRO_REAL
    presumed_profit_percentage: Percentage = field(init=False, default=PRESUMED_PROFIT_PERCENTAGE)
    taxable_profit: Money = field(init=False)
    tax_rate: Percentage = field(init=False, default=CSLL_RATE)
    tax_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        taxable_profit = _presumed_profit(self.tax_base)
        object.__setattr__(self, "taxable_profit", taxable_profit)
        object.__setattr__(self, "tax_amount", taxable_profit.multiply(self.tax_rate).round_to_tax_standard())


@dataclass(frozen=True)
class TaxCalculations:
    """
    All six taxes for one operation.

    IOF is based on the preliminary net amount (face value minus deságio),
    which must be known before the final net amount because IOF itself is
    part of the total deducted from it.

    total = round(sum of the individually rounded tax amounts)
    effective rate = total / face value
    """

    desagio_amount: Money
    face_value: Money
    net_amount_for_iof: Money
    days_until_maturity: int
    tax_regime: TaxRegime
    municipality: Municipality
    iof_entity_type: IOFEntityType = IOFEntityType.LEGAL_ENTITY

    iss: ISSCalculation = field(init=False)
    pis: PISCalculation = field(init=False)
    cofins: COFINSCalculation = field(init=False)
    irpj: IRPJCalculation = field(init=False)
    csll: CSLLCalculation = field(init=False)
    iof: IOFCalculation = field(init=False)
    total_tax_amount: Money = field(init=False)
    effective_tax_rate: Percentage = field(init=False)

    def __post_init__(self) -> None:
        iss = ISSCalculation(self.desagio_amount, self.municipality)
        pis = PISCalculation(self.desagio_amount, self.tax_regime)
        cofins = COFINSCalculation(self.desagio_amount, self.tax_regime)
        irpj = IRPJCalculation(self.desagio_amount, self.tax_regime)
        csll = CSLLCalculation(self.desagio_amount, self.tax_regime)
        iof = IOFCalculation(self.net_amount_for_iof, self.days_until_maturity, self.iof_entity_type)

        total = (
            iss.tax_amount.add(pis.tax_amount)
            .add(cofins.tax_amount)
            .add(irpj.tax_amount)
            .add(csll.tax_amount)
            .add(iof.total_iof_amount)
            .round_to_tax_standard()
        )

        object.__setattr__(self, "iss", iss)
        object.__setattr__(self, "pis", pis)
        object.__setattr__(self, "cofins", cofins)
        object.__setattr__(self, "irpj", irpj)
        object.__setattr__(self, "csll", csll)
        object.__setattr__(self, "iof", iof)
        object.__setattr__(self, "total_tax_amount", total)
        object.__setattr__(
            self,
            "effective_tax_rate",
            Percentage.from_decimal(total.amount / self.face_value.amount),
        )
