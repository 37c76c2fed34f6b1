"""Rate composition and deságio calculation - core pricing logic"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Mapping, Type

from factoring_simulator.domain.enums import (
    CreditRating,
    EconomicSector,
    FactoringModality,
    OperationVolume,
    RiskProfile,
)
from factoring_simulator.domain.money import Money, Number, Percentage, to_decimal

SIMPLE_INTEREST_MAX_MONTHS = Decimal(3)

# Sector base rates, anchored on the ANFAC purchase factor (4.0-4.8% a.m.)
SECTOR_BASE_RATES: Dict[EconomicSector, Percentage] = {
    EconomicSector.RETAIL: Percentage.from_percentage("4.0"),
    EconomicSector.SERVICES: Percentage.from_percentage("4.3"),
    EconomicSector.INDUSTRY: Percentage.from_percentage("4.1"),
    EconomicSector.CONSTRUCTION: Percentage.from_percentage("4.8"),
    EconomicSector.HEALTHCARE: Percentage.from_percentage("3.8"),
    EconomicSector.AGRICULTURE: Percentage.from_percentage("4.5"),
    EconomicSector.TECHNOLOGY: Percentage.from_percentage("4.2"),
    EconomicSector.OTHER: Percentage.from_percentage("4.5"),
}

CLIENT_RISK_PREMIUMS: Dict[RiskProfile, Percentage] = {
    RiskProfile.A: Percentage.from_percentage("0.0"),
    RiskProfile.B: Percentage.from_percentage("0.3"),
    RiskProfile.C: Percentage.from_percentage("0.7"),
    RiskProfile.D: Percentage.from_percentage("1.2"),
    RiskProfile.E: Percentage.from_percentage("2.0"),
}

DEBTOR_RISK_PREMIUMS: Dict[CreditRating, Percentage] = {
    CreditRating.AAA: Percentage.from_percentage("0.0"),
    CreditRating.AA: Percentage.from_percentage("0.2"),
    CreditRating.A: Percentage.from_percentage("0.4"),
    CreditRating.BBB: Percentage.from_percentage("0.7"),
    CreditRating.BB: Percentage.from_percentage("1.0"),
    CreditRating.B: Percentage.from_percentage("1.5"),
    CreditRating.CCC: Percentage.from_percentage("2.5"),
}


@dataclass(frozen=True)
class ModalityAdjustment:
    """Magnitude of a modality adjustment plus whether it lowers the rate"""

    adjustment: Percentage
    is_discount: bool = False


MODALITY_ADJUSTMENTS: Dict[FactoringModality, ModalityAdjustment] = {
    FactoringModality.WITH_RECOURSE: ModalityAdjustment(Percentage.from_percentage("0.0")),
    FactoringModality.WITHOUT_RECOURSE: ModalityAdjustment(Percentage.from_percentage("2.0")),
    # No funds are advanced in maturity factoring, so it is cheaper
    FactoringModality.MATURITY: ModalityAdjustment(Percentage.from_percentage("2.5"), is_discount=True),
    FactoringModality.TRUSTEE: ModalityAdjustment(Percentage.from_percentage("1.0")),
    FactoringModality.INTERNATIONAL: ModalityAdjustment(Percentage.from_percentage("3.0")),
    FactoringModality.RAW_MATERIAL: ModalityAdjustment(Percentage.from_percentage("0.5")),
}

VOLUME_DISCOUNTS: Dict[OperationVolume, Percentage] = {
    OperationVolume.SMALL: Percentage.from_percentage("0.0"),
    OperationVolume.MEDIUM: Percentage.from_percentage("5.0"),
    OperationVolume.LARGE: Percentage.from_percentage("10.0"),
}


def _require_exhaustive(table: Mapping, enum_type: Type[Enum]) -> None:
    missing = [member.value for member in enum_type if member not in table]
    if missing:
        raise RuntimeError(f"Lookup table for {enum_type.__name__} is missing entries: {missing}")


_require_exhaustive(SECTOR_BASE_RATES, EconomicSector)
_require_exhaustive(CLIENT_RISK_PREMIUMS, RiskProfile)
_require_exhaustive(DEBTOR_RISK_PREMIUMS, CreditRating)
_require_exhaustive(MODALITY_ADJUSTMENTS, FactoringModality)
_require_exhaustive(VOLUME_DISCOUNTS, OperationVolume)


def classify_operation_volume(
    face_value: Number,
    small_limit: Number = Decimal(50_000),
    medium_limit: Number = Decimal(500_000),
) -> OperationVolume:
    """
    Map face value to a volume tier.

    Tiers:
    - below 50k:  small  (no discount)
    - below 500k: medium (5% discount)
    - otherwise:  large  (10% discount)
    """
    value = to_decimal(face_value)
    if value < to_decimal(small_limit):
        return OperationVolume.SMALL
    if value < to_decimal(medium_limit):
        return OperationVolume.MEDIUM
    return OperationVolume.LARGE


def calculate_desagio_percentage(monthly_rate: Percentage, term_in_months: Decimal) -> Percentage:
    """
    Deságio as a fraction of face value.

    Terms up to 3 months (inclusive) use simple interest: r * t.
    Longer terms use the compound discount: 1 - 1 / (1 + r)^t, where t may
    be fractional.
    """
    rate = monthly_rate.to_decimal()
    if term_in_months <= SIMPLE_INTEREST_MAX_MONTHS:
        return Percentage.from_decimal(rate * term_in_months)

    compound_factor = (Decimal(1) + rate) ** term_in_months
    return Percentage.from_decimal(Decimal(1) - Decimal(1) / compound_factor)


@dataclass(frozen=True)
class RateCalculation:
    """
    Risk-adjusted monthly rate and resulting deságio for one receivable.

    final = (base + risk +/- modality) * (1 - volume discount)
    annual = (1 + final)^12 - 1
    """

    face_value: Money
    term_in_months: Decimal
    economic_sector: EconomicSector
    client_risk_profile: RiskProfile
    debtor_credit_rating: CreditRating
    modality: FactoringModality
    operation_volume: OperationVolume

    base_monthly_rate: Percentage = field(init=False)
    risk_adjustment: Percentage = field(init=False)
    modality_adjustment: Percentage = field(init=False)
    volume_discount: Percentage = field(init=False)
    final_monthly_rate: Percentage = field(init=False)
    effective_annual_rate: Percentage = field(init=False)
    desagio_percentage: Percentage = field(init=False)
    desagio_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        term = to_decimal(self.term_in_months)
        base = SECTOR_BASE_RATES[self.economic_sector]
        risk = CLIENT_RISK_PREMIUMS[self.client_risk_profile].add(
            DEBTOR_RISK_PREMIUMS[self.debtor_credit_rating]
        )
        modality = MODALITY_ADJUSTMENTS[self.modality]
        volume_discount = VOLUME_DISCOUNTS[self.operation_volume]

        adjusted = base.add(risk)
        if modality.is_discount:
            adjusted = adjusted.subtract(modality.adjustment)
        else:
            adjusted = adjusted.add(modality.adjustment)

        final_rate = adjusted.multiply(Decimal(1) - volume_discount.to_decimal())
        annual_rate = Percentage.from_decimal((Decimal(1) + final_rate.to_decimal()) ** 12 - 1)
        desagio_percentage = calculate_desagio_percentage(final_rate, term)
        desagio_amount = self.face_value.multiply(desagio_percentage).round_to_tax_standard()

        object.__setattr__(self, "term_in_months", term)
        object.__setattr__(self, "base_monthly_rate", base)
        object.__setattr__(self, "risk_adjustment", risk)
        object.__setattr__(self, "modality_adjustment", modality.adjustment)
        object.__setattr__(self, "volume_discount", volume_discount)
        object.__setattr__(self, "final_monthly_rate", final_rate)
        object.__setattr__(self, "effective_annual_rate", annual_rate)
        object.__setattr__(self, "desagio_percentage", desagio_percentage)
        object.__setattr__(self, "desagio_amount", desagio_amount)

    @property
    def modality_is_discount(self) -> bool:
        return MODALITY_ADJUSTMENTS[self.modality].is_discount
