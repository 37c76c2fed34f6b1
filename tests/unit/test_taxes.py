"""Unit tests for tax calculators, IOF and net settlement"""

import pytest
from decimal import Decimal
from factoring_simulator.domain.enums import ContributionRegime, IOFEntityType, TaxRegime
from factoring_simulator.domain.iof import IOFCalculation
from factoring_simulator.domain.money import Money, Percentage
from factoring_simulator.domain.settlement import NetCalculation
from factoring_simulator.domain.taxes import (
    COFINSCalculation,
    CSLLCalculation,
    IRPJCalculation,
    ISSCalculation,
    Municipality,
    PISCalculation,
    TaxCalculations,
)


DESAGIO = Money("9500.00")
RIO = Municipality(code="3304557", name="Rio de Janeiro")


def test_iss_defaults_to_three_percent():
    """Test ISS without a municipality-specific rate"""
    iss = ISSCalculation(DESAGIO, RIO)
    assert iss.tax_rate.to_percentage_value() == Decimal("3.0")
    assert iss.tax_amount == Money("285.00")
    assert iss.tax_base == DESAGIO


def test_iss_uses_municipality_rate():
    """Test ISS honors a configured municipal rate"""
    sao_paulo = Municipality("3550308", "São Paulo", Percentage.from_percentage(2))
    assert ISSCalculation(DESAGIO, sao_paulo).tax_amount == Money("190.00")


def test_pis_and_cofins_always_non_cumulative():
    """Test factoring companies are forced into the non-cumulative regime"""
    pis = PISCalculation(DESAGIO, TaxRegime.LUCRO_REAL)
    cofins = COFINSCalculation(DESAGIO, TaxRegime.LUCRO_REAL)

    assert pis.regime == ContributionRegime.NON_CUMULATIVE
    assert cofins.regime == ContributionRegime.NON_CUMULATIVE
    assert pis.tax_amount == Money("156.75")
    assert cofins.tax_amount == Money("722.00")


def test_irpj_and_csll_on_presumed_profit():
    """Test 32% presumed profit then 15% IRPJ / 9% CSLL"""
    irpj = IRPJCalculation(DESAGIO, TaxRegime.LUCRO_REAL)
    csll = CSLLCalculation(DESAGIO, TaxRegime.LUCRO_REAL)

    assert irpj.taxable_profit == Money("3040.00")
    assert irpj.tax_amount == Money("456.00")
    assert csll.taxable_profit == Money("3040.00")
    assert csll.tax_amount == Money("273.60")


def test_tax_amounts_round_half_up():
    """Test a base that lands on half a cent rounds up"""
    # 150.50 * 3% = 4.515 -> 4.52
    assert ISSCalculation(Money("150.50"), RIO).tax_amount == Money("4.52")


def test_iof_legal_entity():
    """Test daily + fixed IOF for a legal entity over 60 days"""
    iof = IOFCalculation(Money("90500.00"), 60, IOFEntityType.LEGAL_ENTITY)

    assert iof.daily_iof == Money("222.63")
    assert iof.fixed_iof == Money("343.90")
    assert iof.total_iof_amount == Money("566.53")
    assert iof.effective_iof_rate.to_decimal() == Decimal("566.53") / Decimal("90500.00")


@pytest.mark.parametrize(
    "entity_type,daily_rate",
    [
        (IOFEntityType.INDIVIDUAL, Decimal("0.0082")),
        (IOFEntityType.LEGAL_ENTITY, Decimal("0.0041")),
        (IOFEntityType.SMALL_SIMPLIFIED, Decimal("0.00137")),
    ],
)
def test_iof_rate_table(entity_type, daily_rate):
    """Test daily rates per entity type, fixed 0.38% for all"""
    iof = IOFCalculation(Money("10000"), 30, entity_type)
    assert iof.daily_rate.to_percentage_value() == daily_rate
    assert iof.fixed_rate.to_percentage_value() == Decimal("0.38")


def test_iof_days_capped_at_365():
    """Test 400 days is treated as 365"""
    capped = IOFCalculation(Money("10000"), 400)
    year = IOFCalculation(Money("10000"), 365)

    assert capped.days_until_maturity == 365
    assert capped.daily_iof == year.daily_iof
    # 10000 * 0.000041 * 365 = 149.65
    assert capped.daily_iof == Money("149.65")


def test_iof_breakdown_labels_entity_type():
    """Test display breakdown"""
    breakdown = IOFCalculation(Money("90500.00"), 60).breakdown()

    assert breakdown["entity_type"] == "Pessoa Jurídica"
    assert breakdown["daily_rate"] == Decimal("0.0041")
    assert breakdown["total_iof"] == Decimal("566.53")
    assert breakdown["days_until_maturity"] == 60


def test_tax_calculations_totals():
    """Test aggregate of all six taxes and effective rate"""
    taxes = TaxCalculations(
        desagio_amount=DESAGIO,
        face_value=Money("100000"),
        net_amount_for_iof=Money("90500.00"),
        days_until_maturity=60,
        tax_regime=TaxRegime.LUCRO_REAL,
        municipality=RIO,
    )

    component_sum = (
        taxes.iss.tax_amount.amount
        + taxes.pis.tax_amount.amount
        + taxes.cofins.tax_amount.amount
        + taxes.irpj.tax_amount.amount
        + taxes.csll.tax_amount.amount
        + taxes.iof.total_iof_amount.amount
    )
    assert taxes.total_tax_amount.amount == component_sum
    assert taxes.total_tax_amount == Money("2459.88")
    assert taxes.effective_tax_rate.to_decimal() == Decimal("0.0245988")


def test_tax_calculations_use_desagio_not_face_value():
    """Test revenue taxes are based on the deságio"""
    taxes = TaxCalculations(DESAGIO, Money("100000"), Money("90500"), 60, TaxRegime.LUCRO_REAL, RIO)

    for calculation in (taxes.iss, taxes.pis, taxes.cofins, taxes.irpj, taxes.csll):
        assert calculation.tax_base == DESAGIO
    assert taxes.iof.tax_base == Money("90500")


def test_net_calculation():
    """Test net = face - deságio - taxes and effective discount"""
    net = NetCalculation(Money("100000"), DESAGIO, Money("2459.88"))

    assert net.net_amount == Money("88040.12")
    assert net.effective_discount.to_decimal() == Decimal("0.1195988")
    assert net.total_deductions == Money("11959.88")


def test_net_calculation_allows_negative_result():
    """Test the value object itself does not reject non-viable operations"""
    net = NetCalculation(Money("1000"), Money("900"), Money("200"))
    assert net.net_amount == Money("-100")
    assert not net.net_amount.is_positive()
