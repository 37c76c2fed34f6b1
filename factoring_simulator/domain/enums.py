"""Enumeration types for factoring operations"""

from enum import Enum


class Currency(str, Enum):
    BRL = "BRL"
    USD = "USD"
    EUR = "EUR"


class EconomicSector(str, Enum):
    RETAIL = "retail"
    SERVICES = "services"
    INDUSTRY = "industry"
    CONSTRUCTION = "construction"
    HEALTHCARE = "healthcare"
    AGRICULTURE = "agriculture"
    TECHNOLOGY = "technology"
    OTHER = "other"


class FactoringModality(str, Enum):
    WITH_RECOURSE = "with-recourse"  # com regresso
    WITHOUT_RECOURSE = "without-recourse"  # sem regresso
    MATURITY = "maturity"  # no advance, payment guarantee only
    TRUSTEE = "trustee"  # full financial administration
    INTERNATIONAL = "international"
    RAW_MATERIAL = "raw-material"


class RiskProfile(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class CreditRating(str, Enum):
    AAA = "AAA"
    AA = "AA"
    A = "A"
    BBB = "BBB"
    BB = "BB"
    B = "B"
    CCC = "CCC"


class OperationVolume(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class TaxRegime(str, Enum):
    # Lei 9.718/98 art. 14: factoring companies may only use Lucro Real
    LUCRO_REAL = "lucro-real"


class ContributionRegime(str, Enum):
    """PIS/COFINS collection regime"""

    SIMPLES_NACIONAL = "simples-nacional"
    CUMULATIVE = "cumulative"
    NON_CUMULATIVE = "non-cumulative"


class IOFEntityType(str, Enum):
    INDIVIDUAL = "individual"  # pessoa física
    LEGAL_ENTITY = "legal-entity"  # pessoa jurídica
    SMALL_SIMPLIFIED = "small-simplified"  # Simples Nacional, operations < R$ 30k
