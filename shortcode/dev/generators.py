import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from ..generator.manager import GeneratorManager, get_generator_manager
from ..models import GeneratorParamsInfo, ListGeneratorsResponse

router = APIRouter(prefix="/generators", tags=["dev-tools"])


@router.get("/list", response_model=ListGeneratorsResponse)
async def list_generators(
    *, generator_manager: GeneratorManager = Depends(get_generator_manager)
):
    return ListGeneratorsResponse(
        [managed.get_info_model() for managed in generator_manager.iter_generators()]
    )


@router.get(
    "/{generator_id}/params",
    response_model=GeneratorParamsInfo,
    responses={status.HTTP_404_NOT_FOUND: {}},
)
async def get_generator_params(
    generator_id: uuid.UUID,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    """LCG parameters and output offset of the generator's current code length."""
    managed = generator_manager.get_generator(generator_id)
    if managed is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND)
    return managed.get_params_model()
