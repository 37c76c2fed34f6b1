"""Factoring simulation use case - composes rates, taxes and settlement"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, Type, TypeVar

from factoring_simulator.application.dtos import (
    IOFDetail,
    NetBreakdown,
    RateBreakdown,
    SimulationInput,
    SimulationOutput,
    TaxBreakdown,
    TaxDetail,
)
from factoring_simulator.config import Settings, settings as default_settings
from factoring_simulator.domain.enums import (
    CreditRating,
    EconomicSector,
    FactoringModality,
    RiskProfile,
    TaxRegime,
)
from factoring_simulator.domain.exceptions import (
    DomainError,
    FactoringException,
    SimulationError,
    ValidationError,
)
from factoring_simulator.domain.money import Money, Percentage, to_decimal
from factoring_simulator.domain.rates import RateCalculation, classify_operation_volume
from factoring_simulator.domain.settlement import NetCalculation
from factoring_simulator.domain.taxes import Municipality, TaxCalculations
from factoring_simulator.utils.date_utils import days_between, parse_iso_date, term_in_months

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _coerce_enum(enum_type: Type[E], value, field_name: str) -> E:
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"Invalid {field_name} {value!r}; expected one of: {allowed}")


class SimulateFactoringUseCase:
    """
    Price a duplicata and compute the net amount paid to the client.

    Flow:
    1. Validate face value and due date
    2. Count days to maturity from today, derive continuous term in months
    3. Reject due dates not after today or not after the issue date
    4. Classify operation volume and resolve the municipality ISS rate
    5. Rate calculation -> deságio
    6. Taxes, with IOF based on face value minus deságio
    7. Net settlement, rejecting non-positive net amounts
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings or default_settings
        self.today = today

    def execute(self, simulation_input: SimulationInput) -> SimulationOutput:
        try:
            return self._simulate(simulation_input)
        except FactoringException:
            raise
        except Exception as e:
            logger.error(f"Unexpected simulation error: {e}", exc_info=True)
            raise SimulationError(f"Simulation failed: {e}") from e

    def _simulate(self, simulation_input: SimulationInput) -> SimulationOutput:
        face_amount = self._validate_input(simulation_input)

        sector = _coerce_enum(EconomicSector, simulation_input.economic_sector, "economic sector")
        modality = _coerce_enum(FactoringModality, simulation_input.modality, "modality")
        risk_profile = _coerce_enum(RiskProfile, simulation_input.client_risk_profile, "client risk profile")
        credit_rating = _coerce_enum(CreditRating, simulation_input.debtor_credit_rating, "debtor credit rating")
        tax_regime = _coerce_enum(TaxRegime, simulation_input.tax_regime, "tax regime")

        due_date = parse_iso_date(simulation_input.due_date)
        days_to_maturity = days_between(self.today(), due_date)
        term = term_in_months(days_to_maturity)

        if days_to_maturity <= 0:
            raise DomainError("Due date must be after today")

        if simulation_input.issue_date:
            issue_date = parse_iso_date(simulation_input.issue_date)
            if days_between(issue_date, due_date) <= 0:
                raise DomainError("Due date must be after the issue date")

        face_value = Money(face_amount, self.settings.currency)
        operation_volume = classify_operation_volume(
            face_amount,
            self.settings.small_volume_limit,
            self.settings.medium_volume_limit,
        )
        municipality = self._resolve_municipality(simulation_input)

        rate_calculation = RateCalculation(
            face_value=face_value,
            term_in_months=term,
            economic_sector=sector,
            client_risk_profile=risk_profile,
            debtor_credit_rating=credit_rating,
            modality=modality,
            operation_volume=operation_volume,
        )

        # IOF base: what the client receives before taxes
        preliminary_net_amount = face_value.subtract(rate_calculation.desagio_amount)

        tax_calculations = TaxCalculations(
            desagio_amount=rate_calculation.desagio_amount,
            face_value=face_value,
            net_amount_for_iof=preliminary_net_amount,
            days_until_maturity=days_to_maturity,
            tax_regime=tax_regime,
            municipality=municipality,
            iof_entity_type=self.settings.iof_entity_type,
        )

        net_calculation = NetCalculation(
            duplicata_face_value=face_value,
            total_desagio=rate_calculation.desagio_amount,
            total_taxes=tax_calculations.total_tax_amount,
        )

        if not net_calculation.net_amount.is_positive():
            raise DomainError(
                "Simulation results in a zero or negative net amount; adjust the operation parameters"
            )

        logger.debug(
            "Simulation computed",
            extra={
                "duplicata_number": simulation_input.duplicata_number,
                "operation_volume": operation_volume.value,
                "days_to_maturity": days_to_maturity,
            },
        )

        return SimulationOutput(
            duplicata_number=simulation_input.duplicata_number,
            face_value=face_value.amount,
            due_date=due_date.isoformat(),
            days_to_maturity=days_to_maturity,
            term_in_months=term,
            debtor_name=simulation_input.debtor_name,
            debtor_document=simulation_input.debtor_document,
            operation_volume=operation_volume.value,
            rate_calculation=self._build_rate_breakdown(rate_calculation),
            tax_calculations=self._build_tax_breakdown(tax_calculations),
            net_calculation=self._build_net_breakdown(net_calculation),
            simulated_at=datetime.now(timezone.utc),
        )

    def _validate_input(self, simulation_input: SimulationInput) -> Decimal:
        if simulation_input.face_value is None:
            raise ValidationError("Face value is required")
        face_amount = to_decimal(simulation_input.face_value)
        if not face_amount.is_finite():
            raise ValidationError("Face value must be greater than zero")
        # Sub-cent amounts round to zero once they become Money
        face_value = Money(face_amount, self.settings.currency)
        if not face_value.is_positive():
            raise ValidationError("Face value must be greater than zero")

        if not simulation_input.due_date:
            raise ValidationError("Due date is required")

        return face_value.amount

    def _resolve_municipality(self, simulation_input: SimulationInput) -> Municipality:
        """Configured municipality rate, falling back to the default ISS rate"""
        rate = self.settings.municipality_iss_rates.get(
            simulation_input.municipality_code,
            self.settings.default_iss_rate,
        )
        return Municipality(
            code=simulation_input.municipality_code,
            name=simulation_input.municipality_name,
            iss_rate_for_factoring=Percentage.from_percentage(rate),
        )

    @staticmethod
    def _build_rate_breakdown(rate_calc: RateCalculation) -> RateBreakdown:
        return RateBreakdown(
            base_monthly_rate=rate_calc.base_monthly_rate.to_percentage_value(),
            risk_adjustment=rate_calc.risk_adjustment.to_percentage_value(),
            modality_adjustment=rate_calc.modality_adjustment.to_percentage_value(),
            volume_discount=rate_calc.volume_discount.to_percentage_value(),
            final_monthly_rate=rate_calc.final_monthly_rate.to_percentage_value(),
            effective_annual_rate=rate_calc.effective_annual_rate.to_percentage_value(),
            desagio_percentage=rate_calc.desagio_percentage.to_percentage_value(),
            desagio_amount=rate_calc.desagio_amount.amount,
        )

    @staticmethod
    def _build_tax_breakdown(taxes: TaxCalculations) -> TaxBreakdown:
        def detail(calculation) -> TaxDetail:
            return TaxDetail(
                tax_base=calculation.tax_base.amount,
                rate=calculation.tax_rate.to_percentage_value(),
                amount=calculation.tax_amount.amount,
            )

        iof = taxes.iof
        return TaxBreakdown(
            iss=detail(taxes.iss),
            pis=detail(taxes.pis),
            cofins=detail(taxes.cofins),
            irpj=detail(taxes.irpj),
            csll=detail(taxes.csll),
            iof=IOFDetail(
                tax_base=iof.tax_base.amount,
                daily_rate=iof.daily_rate.to_percentage_value(),
                fixed_rate=iof.fixed_rate.to_percentage_value(),
                daily_iof=iof.daily_iof.amount,
                fixed_iof=iof.fixed_iof.amount,
                amount=iof.total_iof_amount.amount,
                days_until_maturity=iof.days_until_maturity,
            ),
            total_tax_amount=taxes.total_tax_amount.amount,
            effective_tax_rate=taxes.effective_tax_rate.to_percentage_value(),
        )

    @staticmethod
    def _build_net_breakdown(net: NetCalculation) -> NetBreakdown:
        return NetBreakdown(
            duplicata_face_value=net.duplicata_face_value.amount,
            total_desagio=net.total_desagio.amount,
            total_taxes=net.total_taxes.amount,
            net_amount=net.net_amount.amount,
            effective_discount=net.effective_discount.to_percentage_value(),
        )
