"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from typing import Dict

from pydantic_settings import BaseSettings, SettingsConfigDict

from factoring_simulator.domain.enums import Currency, IOFEntityType


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "factoring-simulator"
    log_level: str = "INFO"

    # Pricing
    currency: Currency = Currency.BRL
    small_volume_limit: Decimal = Decimal("50000")
    medium_volume_limit: Decimal = Decimal("500000")

    # Taxes (percent literals, 3.0 = 3%)
    default_iss_rate: Decimal = Decimal("3.0")
    municipality_iss_rates: Dict[str, Decimal] = {}  # IBGE code -> ISS rate, JSON in env
    iof_entity_type: IOFEntityType = IOFEntityType.LEGAL_ENTITY


settings = Settings()
