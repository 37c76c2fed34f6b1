"""Simulation input/output records - plain immutable data, no behavior"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from factoring_simulator.domain.enums import (
    CreditRating,
    EconomicSector,
    FactoringModality,
    RiskProfile,
    TaxRegime,
)


@dataclass(frozen=True)
class SimulationInput:
    """Snapshot of a duplicata and the operation parameters to price it with"""

    duplicata_number: str
    issue_date: Optional[str]  # ISO date
    due_date: Optional[str]  # ISO date
    face_value: Union[Decimal, int, float, str]

    debtor_name: str
    debtor_document: str  # CNPJ
    debtor_credit_rating: Union[CreditRating, str]

    creditor_name: str
    creditor_document: str  # CNPJ

    economic_sector: Union[EconomicSector, str]
    modality: Union[FactoringModality, str]
    client_risk_profile: Union[RiskProfile, str]
    tax_regime: Union[TaxRegime, str] = TaxRegime.LUCRO_REAL
    municipality_code: str = ""  # IBGE code
    municipality_name: str = ""


@dataclass(frozen=True)
class TaxDetail:
    tax_base: Decimal
    rate: Decimal  # percent value
    amount: Decimal


@dataclass(frozen=True)
class IOFDetail:
    tax_base: Decimal
    daily_rate: Decimal  # percent per day
    fixed_rate: Decimal  # percent
    daily_iof: Decimal
    fixed_iof: Decimal
    amount: Decimal
    days_until_maturity: int


@dataclass(frozen=True)
class RateBreakdown:
    """All rates are percent values (4.75 = 4.75%)"""

    base_monthly_rate: Decimal
    risk_adjustment: Decimal
    modality_adjustment: Decimal
    volume_discount: Decimal
    final_monthly_rate: Decimal
    effective_annual_rate: Decimal
    desagio_percentage: Decimal
    desagio_amount: Decimal


@dataclass(frozen=True)
class TaxBreakdown:
    iss: TaxDetail
    pis: TaxDetail
    cofins: TaxDetail
    irpj: TaxDetail
    csll: TaxDetail
    iof: IOFDetail
    total_tax_amount: Decimal
    effective_tax_rate: Decimal  # percent of face value


@dataclass(frozen=True)
class NetBreakdown:
    duplicata_face_value: Decimal
    total_desagio: Decimal
    total_taxes: Decimal
    net_amount: Decimal
    effective_discount: Decimal  # percent of face value


@dataclass(frozen=True)
class SimulationOutput:
    """Fully resolved simulation result"""

    duplicata_number: str
    face_value: Decimal
    due_date: str
    days_to_maturity: int
    term_in_months: Decimal
    debtor_name: str
    debtor_document: str
    operation_volume: str

    rate_calculation: RateBreakdown
    tax_calculations: TaxBreakdown
    net_calculation: NetBreakdown

    simulated_at: datetime
