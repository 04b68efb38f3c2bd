import uuid
from typing import Annotated

from pydantic import BaseModel, Field, RootModel, StringConstraints, model_validator

from .general import AlphabetPreset, ExhaustionStrategy
from .state import LcgParams, PartitionDescriptor

DEFAULT_CODE_LENGTH = 6
DEFAULT_PRESET = AlphabetPreset.UNAMBIGUOUS
MAX_PARTITIONS = 1024


class CreateGeneratorRequest(BaseModel):
    preset: AlphabetPreset | None = None
    # every character is one symbol
    alphabet: Annotated[str, StringConstraints(min_length=1)] | None = None
    length: int = Field(default=DEFAULT_CODE_LENGTH, ge=1)
    exhaustion_strategy: ExhaustionStrategy = ExhaustionStrategy.INCREASE_LENGTH
    seed: int | None = None

    @model_validator(mode="after")
    def _check_alphabet_source(self) -> "CreateGeneratorRequest":
        if self.preset is not None and self.alphabet is not None:
            raise ValueError("pass either a preset or an alphabet, not both")
        return self


class CreateGeneratorResponse(BaseModel):
    generator_id: uuid.UUID
    length: int


class GeneratorInfo(BaseModel):
    generator_id: uuid.UUID
    length: int
    alphabet_size: int
    modulus: int
    steps_taken: int
    remaining: int
    exhaustion_strategy: ExhaustionStrategy
    partition: PartitionDescriptor | None


class GeneratorParamsInfo(BaseModel):
    generator_id: uuid.UUID
    params: LcgParams
    offset: int
    full_period: bool


class ListGeneratorsResponse(RootModel[list[GeneratorInfo]]):
    ...


class IssueCodesResponse(BaseModel):
    generator_id: uuid.UUID
    codes: list[str]


class PartitionRequest(BaseModel):
    count: int = Field(ge=1, le=MAX_PARTITIONS)


class PartitionResponse(BaseModel):
    generator_ids: list[uuid.UUID]


__all__ = [
    "DEFAULT_CODE_LENGTH",
    "DEFAULT_PRESET",
    "MAX_PARTITIONS",
    CreateGeneratorRequest.__name__,
    CreateGeneratorResponse.__name__,
    GeneratorInfo.__name__,
    GeneratorParamsInfo.__name__,
    ListGeneratorsResponse.__name__,
    IssueCodesResponse.__name__,
    PartitionRequest.__name__,
    PartitionResponse.__name__,
]
