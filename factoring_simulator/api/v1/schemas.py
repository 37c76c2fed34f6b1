"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional

from factoring_simulator.domain.enums import (
    CreditRating,
    EconomicSector,
    FactoringModality,
    RiskProfile,
    TaxRegime,
)


class SimulationRequest(BaseModel):
    """Request body for POST /v1/simulations"""

    duplicata_number: str = Field(..., min_length=1, description="Duplicata identifier")
    issue_date: Optional[date] = Field(None, description="Issue date (ISO-8601)")
    due_date: date = Field(..., description="Due date (ISO-8601)")
    face_value: Decimal = Field(..., gt=0, decimal_places=2, description="Face value in BRL")

    debtor_name: str = Field("", description="Sacado name")
    debtor_document: str = Field("", description="Sacado CNPJ")
    debtor_credit_rating: CreditRating

    creditor_name: str = Field("", description="Cedente name")
    creditor_document: str = Field("", description="Cedente CNPJ")

    economic_sector: EconomicSector
    modality: FactoringModality
    client_risk_profile: RiskProfile
    tax_regime: TaxRegime = TaxRegime.LUCRO_REAL
    municipality_code: str = Field("", description="IBGE municipality code")
    municipality_name: str = ""


class TaxDetailSchema(BaseModel):
    tax_base: float
    rate: float
    amount: float


class IOFDetailSchema(BaseModel):
    tax_base: float
    daily_rate: float
    fixed_rate: float
    daily_iof: float
    fixed_iof: float
    amount: float
    days_until_maturity: int


class RateCalculationSchema(BaseModel):
    base_monthly_rate: float
    risk_adjustment: float
    modality_adjustment: float
    volume_discount: float
    final_monthly_rate: float
    effective_annual_rate: float
    desagio_percentage: float
    desagio_amount: float


class TaxCalculationsSchema(BaseModel):
    iss: TaxDetailSchema
    pis: TaxDetailSchema
    cofins: TaxDetailSchema
    irpj: TaxDetailSchema
    csll: TaxDetailSchema
    iof: IOFDetailSchema
    total_tax_amount: float
    effective_tax_rate: float


class NetCalculationSchema(BaseModel):
    duplicata_face_value: float
    total_desagio: float
    total_taxes: float
    net_amount: float
    effective_discount: float


class SimulationResponse(BaseModel):
    """Response for POST /v1/simulations"""

    duplicata_number: str
    face_value: float
    due_date: str
    days_to_maturity: int
    term_in_months: float
    debtor_name: str
    debtor_document: str
    operation_volume: str
    rate_calculation: RateCalculationSchema
    tax_calculations: TaxCalculationsSchema
    net_calculation: NetCalculationSchema
    simulated_at: datetime


class ModalityAdjustmentSchema(BaseModel):
    adjustment: float
    is_discount: bool


class RateTablesResponse(BaseModel):
    """Response for GET /v1/rate-tables - all values in percent"""

    sector_base_rates: Dict[str, float]
    client_risk_premiums: Dict[str, float]
    debtor_risk_premiums: Dict[str, float]
    modality_adjustments: Dict[str, ModalityAdjustmentSchema]
    volume_discounts: Dict[str, float]
