"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient

from factoring_simulator.api.main import create_app
from factoring_simulator.api.dependencies import get_simulation_use_case
from factoring_simulator.application.dtos import SimulationInput
from factoring_simulator.application.simulate import SimulateFactoringUseCase
from factoring_simulator.config import Settings


FIXED_TODAY = date(2025, 3, 10)


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file"""
    return Settings(_env_file=None, municipality_iss_rates={"3550308": "2.0"})


@pytest.fixture
def use_case(test_settings: Settings) -> SimulateFactoringUseCase:
    """Use case with a frozen clock"""
    return SimulateFactoringUseCase(settings=test_settings, today=lambda: FIXED_TODAY)


@pytest.fixture
def client(use_case: SimulateFactoringUseCase, test_settings: Settings) -> TestClient:
    """Create FastAPI test client with a deterministic use case"""
    app = create_app(test_settings)
    app.dependency_overrides[get_simulation_use_case] = lambda: use_case
    return TestClient(app)


@pytest.fixture
def sample_input() -> SimulationInput:
    """R$ 100k services duplicata due in 60 days (medium volume)"""
    return SimulationInput(
        duplicata_number="DUP-2025-0001",
        issue_date=FIXED_TODAY.isoformat(),
        due_date=(FIXED_TODAY + timedelta(days=60)).isoformat(),
        face_value=100000,
        debtor_name="Comercial Paulista Ltda",
        debtor_document="11.222.333/0001-81",
        debtor_credit_rating="A",
        creditor_name="Servicos Integrados SA",
        creditor_document="44.555.666/0001-72",
        economic_sector="services",
        modality="with-recourse",
        client_risk_profile="B",
        tax_regime="lucro-real",
        municipality_code="3304557",
        municipality_name="Rio de Janeiro",
    )


@pytest.fixture
def sample_request(sample_input: SimulationInput) -> dict:
    """JSON body equivalent to sample_input"""
    return {
        "duplicata_number": sample_input.duplicata_number,
        "issue_date": sample_input.issue_date,
        "due_date": sample_input.due_date,
        "face_value": 100000,
        "debtor_name": sample_input.debtor_name,
        "debtor_document": sample_input.debtor_document,
        "debtor_credit_rating": "A",
        "creditor_name": sample_input.creditor_name,
        "creditor_document": sample_input.creditor_document,
        "economic_sector": "services",
        "modality": "with-recourse",
        "client_risk_profile": "B",
        "tax_regime": "lucro-real",
        "municipality_code": sample_input.municipality_code,
        "municipality_name": sample_input.municipality_name,
    }
