"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from factoring_simulator.application.simulate import SimulateFactoringUseCase
from factoring_simulator.config import settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_simulation_use_case() -> SimulateFactoringUseCase:
    """Provide a simulation use case bound to the application settings"""
    return SimulateFactoringUseCase(settings=settings)
