"""GET /v1/rate-tables - Pricing lookup tables for form option lists"""

from fastapi import APIRouter

from factoring_simulator.api.v1.schemas import ModalityAdjustmentSchema, RateTablesResponse
from factoring_simulator.domain.rates import (
    CLIENT_RISK_PREMIUMS,
    DEBTOR_RISK_PREMIUMS,
    MODALITY_ADJUSTMENTS,
    SECTOR_BASE_RATES,
    VOLUME_DISCOUNTS,
)

router = APIRouter()


def _as_percent_values(table) -> dict:
    return {key.value: float(rate.to_percentage_value()) for key, rate in table.items()}


@router.get("/rate-tables", response_model=RateTablesResponse)
def get_rate_tables():
    """
    Return the sector, risk, modality and volume tables used for pricing.

    Returns:
        Percent values keyed by enum value; modality entries carry a discount flag
    """
    return RateTablesResponse(
        sector_base_rates=_as_percent_values(SECTOR_BASE_RATES),
        client_risk_premiums=_as_percent_values(CLIENT_RISK_PREMIUMS),
        debtor_risk_premiums=_as_percent_values(DEBTOR_RISK_PREMIUMS),
        modality_adjustments={
            modality.value: ModalityAdjustmentSchema(
                adjustment=float(entry.adjustment.to_percentage_value()),
                is_discount=entry.is_discount,
            )
            for modality, entry in MODALITY_ADJUSTMENTS.items()
        },
        volume_discounts=_as_percent_values(VOLUME_DISCOUNTS),
    )
