import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..models import (
    DEFAULT_PRESET,
    CreateGeneratorRequest,
    CreateGeneratorResponse,
    ErrorPayload,
    GeneratorInfo,
    GeneratorState,
    IssueCodesResponse,
    PartitionRequest,
    PartitionResponse,
)
from .code_generator import CodeGenerator
from .errors import ConfigurationOverflowError, ExhaustedError, RepartitionError
from .manager import GeneratorManager, ManagedGenerator, get_generator_manager

__all__ = ["router"]

_LOGGER = logging.getLogger(__name__)

MAX_CODES_PER_REQUEST = 1000

router = APIRouter(prefix="/generators", tags=["generators"])


def _get_managed_or_404(
    generator_id: uuid.UUID, generator_manager: GeneratorManager
) -> ManagedGenerator:
    managed = generator_manager.get_generator(generator_id)
    if managed is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND)
    return managed


@router.post(
    "",
    response_model=CreateGeneratorResponse,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {}},
)
async def create_generator(
    req: CreateGeneratorRequest,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    try:
        if req.alphabet is not None:
            generator = CodeGenerator(req.alphabet, req.length, seed=req.seed)
        else:
            generator = CodeGenerator.from_preset(
                req.preset or DEFAULT_PRESET, req.length, seed=req.seed
            )
    except ConfigurationOverflowError as exc:
        raise HTTPException(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ErrorPayload.configuration_overflow(
                alphabet_size=exc.alphabet_size, length=exc.length
            ).model_dump(),
        ) from exc

    generator.exhaustion_strategy(req.exhaustion_strategy)
    managed = generator_manager.add_generator(generator)
    _LOGGER.debug(
        "created generator %s with code length %s", managed.generator_id, req.length
    )
    return CreateGeneratorResponse(
        generator_id=managed.generator_id, length=generator.length
    )


@router.post(
    "/restore",
    response_model=CreateGeneratorResponse,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {}},
)
async def restore_generator(
    state: GeneratorState,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    try:
        generator = CodeGenerator.restore(state)
    except (ValueError, TypeError) as exc:
        raise HTTPException(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ErrorPayload.invalid_state(str(exc)).model_dump(),
        ) from exc

    managed = generator_manager.add_generator(generator)
    _LOGGER.debug("restored generator %s", managed.generator_id)
    return CreateGeneratorResponse(
        generator_id=managed.generator_id, length=generator.length
    )


@router.get(
    "/{generator_id}",
    response_model=GeneratorInfo,
    responses={status.HTTP_404_NOT_FOUND: {}},
)
async def get_generator_info(
    generator_id: uuid.UUID,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    return _get_managed_or_404(generator_id, generator_manager).get_info_model()


@router.delete(
    "/{generator_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={status.HTTP_404_NOT_FOUND: {}},
)
async def delete_generator(
    generator_id: uuid.UUID,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    if not generator_manager.remove_generator(generator_id):
        raise HTTPException(status.HTTP_404_NOT_FOUND)


@router.post(
    "/{generator_id}/next",
    response_model=IssueCodesResponse,
    responses={status.HTTP_404_NOT_FOUND: {}, status.HTTP_409_CONFLICT: {}},
)
async def issue_codes(
    generator_id: uuid.UUID,
    count: int = Query(default=1, ge=1, le=MAX_CODES_PER_REQUEST),
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    managed = _get_managed_or_404(generator_id, generator_manager)
    try:
        codes = managed.issue(count)
    except ExhaustedError as exc:
        raise HTTPException(
            status.HTTP_409_CONFLICT,
            detail=ErrorPayload.exhausted(
                length=exc.length, modulus=exc.modulus
            ).model_dump(),
        ) from exc
    except TypeError as exc:
        raise HTTPException(
            status.HTTP_409_CONFLICT, detail=ErrorPayload.not_textual().model_dump()
        ) from exc

    return IssueCodesResponse(generator_id=generator_id, codes=codes)


@router.post(
    "/{generator_id}/partition",
    response_model=PartitionResponse,
    responses={status.HTTP_404_NOT_FOUND: {}, status.HTTP_409_CONFLICT: {}},
)
async def partition_generator(
    generator_id: uuid.UUID,
    req: PartitionRequest,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    managed = _get_managed_or_404(generator_id, generator_manager)
    try:
        partitions = generator_manager.partition_generator(managed, req.count)
    except RepartitionError as exc:
        raise HTTPException(
            status.HTTP_409_CONFLICT,
            detail=ErrorPayload.repartition(stride=exc.stride).model_dump(),
        ) from exc

    _LOGGER.debug("split generator %s into %s partitions", generator_id, req.count)
    return PartitionResponse(
        generator_ids=[part.generator_id for part in partitions]
    )


@router.get(
    "/{generator_id}/state",
    response_model=GeneratorState,
    responses={status.HTTP_404_NOT_FOUND: {}},
)
async def get_generator_state(
    generator_id: uuid.UUID,
    *,
    generator_manager: GeneratorManager = Depends(get_generator_manager),
):
    return _get_managed_or_404(generator_id, generator_manager).snapshot()
