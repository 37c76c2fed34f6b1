"""POST /v1/simulations - factoring simulation endpoint"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from factoring_simulator.api.v1.schemas import SimulationRequest, SimulationResponse
from factoring_simulator.api.dependencies import get_request_id, get_simulation_use_case
from factoring_simulator.application.dtos import SimulationInput
from factoring_simulator.application.simulate import SimulateFactoringUseCase
from factoring_simulator.domain.exceptions import DomainError, ValidationError
from factoring_simulator.infrastructure.observability.metrics import record_simulation, record_simulation_failure
from factoring_simulator.infrastructure.observability.logging import log_simulation

router = APIRouter()


@router.post("/simulations", response_model=SimulationResponse)
def create_simulation(
    request_body: SimulationRequest,
    request: Request,
    use_case: SimulateFactoringUseCase = Depends(get_simulation_use_case),
):
    """
    Simulate a factoring operation for one duplicata.

    Flow:
    1. Map the request onto the simulation input record
    2. Run the simulation (rates, deságio, taxes, net amount)
    3. Record metrics and logs
    4. Return the full breakdown
    """
    start_time = time.time()
    request_id = get_request_id(request)

    simulation_input = SimulationInput(
        duplicata_number=request_body.duplicata_number,
        issue_date=request_body.issue_date.isoformat() if request_body.issue_date else None,
        due_date=request_body.due_date.isoformat(),
        face_value=request_body.face_value,
        debtor_name=request_body.debtor_name,
        debtor_document=request_body.debtor_document,
        debtor_credit_rating=request_body.debtor_credit_rating,
        creditor_name=request_body.creditor_name,
        creditor_document=request_body.creditor_document,
        economic_sector=request_body.economic_sector,
        modality=request_body.modality,
        client_risk_profile=request_body.client_risk_profile,
        tax_regime=request_body.tax_regime,
        municipality_code=request_body.municipality_code,
        municipality_name=request_body.municipality_name,
    )

    try:
        output = use_case.execute(simulation_input)

    except (ValidationError, DomainError) as e:
        record_simulation_failure("rejected")
        logging.warning(f"Simulation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        record_simulation_failure("failed")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_simulation(output.operation_volume, output.net_calculation.net_amount)
    log_simulation(
        request_id,
        output.duplicata_number,
        output.face_value,
        output.net_calculation.net_amount,
        output.operation_volume,
        duration_ms,
    )

    return SimulationResponse.model_validate(asdict(output))
