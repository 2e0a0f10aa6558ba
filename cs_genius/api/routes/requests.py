"""
Request State API Routes

Lets the front end disable a trigger while its contract is in flight.
"""

from fastapi import APIRouter, Depends

from cs_genius.api.dependencies import get_app_state
from cs_genius.models.api_responses import ContractType, RequestStatesResponse
from cs_genius.services.app_state import AppState

router = APIRouter()


@router.get("", response_model=RequestStatesResponse)
async def request_states(state: AppState = Depends(get_app_state)):
    return RequestStatesResponse(states=state.requests.snapshot())


@router.post("/{contract}/reset", response_model=RequestStatesResponse)
async def reset_request(contract: ContractType, state: AppState = Depends(get_app_state)):
    """Return a settled contract to idle (new input or explicit reset)."""
    state.requests.reset(contract)
    return RequestStatesResponse(states=state.requests.snapshot())
