"""Unit tests for the factoring simulation use case"""

import pytest
from dataclasses import replace
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch
from factoring_simulator.application.dtos import SimulationInput
from factoring_simulator.application.simulate import SimulateFactoringUseCase
from factoring_simulator.domain.exceptions import DomainError, SimulationError, ValidationError


def test_reference_scenario_end_to_end(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test R$ 100k / 60 days / services / B / A / with-recourse"""
    output = use_case.execute(sample_input)

    assert output.days_to_maturity == 60
    assert output.term_in_months == Decimal(2)
    assert output.operation_volume == "medium"

    rates = output.rate_calculation
    assert rates.base_monthly_rate == Decimal("4.3")
    assert rates.risk_adjustment == Decimal("0.7")
    assert rates.modality_adjustment == 0
    assert rates.volume_discount == Decimal("5")
    assert rates.final_monthly_rate == Decimal("4.75")
    assert rates.desagio_percentage == Decimal("9.5")
    assert rates.desagio_amount == Decimal("9500.00")

    taxes = output.tax_calculations
    assert taxes.iss.amount == Decimal("285.00")
    assert taxes.pis.amount == Decimal("156.75")
    assert taxes.cofins.amount == Decimal("722.00")
    assert taxes.irpj.amount == Decimal("456.00")
    assert taxes.csll.amount == Decimal("273.60")
    assert taxes.iof.tax_base == Decimal("90500.00")
    assert taxes.iof.daily_iof == Decimal("222.63")
    assert taxes.iof.fixed_iof == Decimal("343.90")
    assert taxes.iof.amount == Decimal("566.53")
    assert taxes.total_tax_amount == Decimal("2459.88")

    net = output.net_calculation
    assert net.net_amount == Decimal("88040.12")
    assert net.effective_discount == Decimal("11.95988")
    assert output.simulated_at.tzinfo is not None


def test_net_amount_identity(use_case: SimulateFactoringUseCase, sample_input: SimulationInput, today):
    """Test net = face - deságio - taxes across several terms and profiles"""
    for days, profile in [(15, "A"), (90, "C"), (91, "D"), (200, "E")]:
        output = use_case.execute(
            replace(
                sample_input,
                due_date=(today + timedelta(days=days)).isoformat(),
                client_risk_profile=profile,
            )
        )
        net = output.net_calculation
        assert net.net_amount == (
            output.face_value - output.rate_calculation.desagio_amount - output.tax_calculations.total_tax_amount
        )
        expected_discount = (output.face_value - net.net_amount) / output.face_value * 100
        assert abs(net.effective_discount - expected_discount) < Decimal("0.01")


def test_municipality_rate_from_settings(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test configured municipality ISS rate overrides the 3% default"""
    output = use_case.execute(replace(sample_input, municipality_code="3550308"))

    assert output.tax_calculations.iss.rate == Decimal("2.0")
    assert output.tax_calculations.iss.amount == Decimal("190.00")


def test_long_term_uses_compound_discount(use_case: SimulateFactoringUseCase, sample_input: SimulationInput, today):
    """Test 120 days (4 months) takes the compound branch"""
    output = use_case.execute(replace(sample_input, due_date=(today + timedelta(days=120)).isoformat()))

    compound = (Decimal(1) - Decimal(1) / Decimal("1.0475") ** Decimal(4)) * 100
    assert output.rate_calculation.desagio_percentage == compound
    assert output.rate_calculation.desagio_percentage < Decimal("19.0")


def test_non_positive_face_value_rejected(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test face value must be greater than zero"""
    with pytest.raises(ValidationError):
        use_case.execute(replace(sample_input, face_value=0))
    with pytest.raises(ValidationError):
        use_case.execute(replace(sample_input, face_value=-100))


def test_sub_cent_face_value_rejected(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test face value rounding to zero cents is a validation error, not a crash"""
    with pytest.raises(ValidationError, match="greater than zero"):
        use_case.execute(replace(sample_input, face_value="0.004"))


def test_missing_due_date_rejected(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test due date is required"""
    with pytest.raises(ValidationError):
        use_case.execute(replace(sample_input, due_date=None))


def test_invalid_enum_values_rejected(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test unknown sector and non Lucro Real regimes are rejected"""
    with pytest.raises(ValidationError):
        use_case.execute(replace(sample_input, economic_sector="mining"))
    with pytest.raises(ValidationError, match="tax regime"):
        use_case.execute(replace(sample_input, tax_regime="lucro-presumido"))


def test_malformed_date_rejected(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test unparseable ISO dates"""
    with pytest.raises(ValidationError):
        use_case.execute(replace(sample_input, due_date="31/12/2025"))


def test_due_date_must_be_in_the_future(use_case: SimulateFactoringUseCase, sample_input: SimulationInput, today):
    """Test due today or earlier is a business rule violation"""
    with pytest.raises(DomainError):
        use_case.execute(replace(sample_input, due_date=today.isoformat()))
    with pytest.raises(DomainError):
        use_case.execute(replace(sample_input, due_date=(today - timedelta(days=5)).isoformat()))


def test_due_date_must_follow_issue_date(use_case: SimulateFactoringUseCase, sample_input: SimulationInput, today):
    """Test issue date on or after due date"""
    due = today + timedelta(days=30)
    with pytest.raises(DomainError):
        use_case.execute(replace(sample_input, issue_date=due.isoformat(), due_date=due.isoformat()))


def test_missing_issue_date_skips_ordering_check(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test issue date is optional"""
    output = use_case.execute(replace(sample_input, issue_date=None))
    assert output.net_calculation.net_amount > 0


def test_datetime_due_date_accepted(use_case: SimulateFactoringUseCase, sample_input: SimulationInput, today):
    """Test ISO datetimes are reduced to their calendar date"""
    due = f"{(today + timedelta(days=60)).isoformat()}T15:30:00Z"
    output = use_case.execute(replace(sample_input, due_date=due))
    assert output.days_to_maturity == 60


def test_non_viable_operation_rejected(use_case: SimulateFactoringUseCase, sample_input: SimulationInput, today):
    """Test deságio plus taxes above face value raises DomainError"""
    expensive = replace(
        sample_input,
        face_value=10000,
        due_date=(today + timedelta(days=3000)).isoformat(),
        economic_sector="construction",
        client_risk_profile="E",
        debtor_credit_rating="CCC",
        modality="international",
    )
    with pytest.raises(DomainError, match="net amount"):
        use_case.execute(expensive)


def test_unexpected_errors_are_wrapped(use_case: SimulateFactoringUseCase, sample_input: SimulationInput):
    """Test non-domain failures surface as SimulationError with the cause message"""
    with patch(
        "factoring_simulator.application.simulate.TaxCalculations",
        side_effect=ArithmeticError("boom"),
    ):
        with pytest.raises(SimulationError, match="Simulation failed: boom") as exc_info:
            use_case.execute(sample_input)

    assert isinstance(exc_info.value.__cause__, ArithmeticError)
