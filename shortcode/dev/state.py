from typing import Any

from fastapi import APIRouter

from ..models import GeneratorState

router = APIRouter(prefix="/state")


@router.get("/schema", response_model=dict[str, Any])
def get_state_schema():
    """JSON schema of the snapshots returned by `GET /generators/{generator_id}/state`."""
    return GeneratorState.model_json_schema()
