from typing import Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

from .general import ExhaustionStrategy

U64_MAX = 2**64 - 1

# symbols that come back from JSON as the same type and value
SerializableSymbol = Union[StrictStr, StrictBool, StrictInt, StrictFloat]


class LcgParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    multiplier: int = Field(ge=0)
    increment: int = Field(ge=0)
    modulus: int = Field(ge=1, le=U64_MAX)


class PartitionDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0)
    stride: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_offset(self) -> "PartitionDescriptor":
        if self.offset >= self.stride:
            raise ValueError("partition offset must be smaller than the stride")
        return self


class GeneratorState(BaseModel):
    """Everything needed to resume issuing codes exactly where a generator stopped."""

    alphabet: list[SerializableSymbol] = Field(min_length=1)
    length: int = Field(ge=1)
    seed: int
    params: LcgParams
    offset: int = Field(ge=0)
    x: int = Field(ge=0)
    steps_taken: int = Field(ge=0)
    exhaustion_strategy: ExhaustionStrategy = ExhaustionStrategy.INCREASE_LENGTH
    partition: PartitionDescriptor | None = None
    skip_before_next: bool = False

    @model_validator(mode="after")
    def _check_consistency(self) -> "GeneratorState":
        modulus = self.params.modulus
        if len(self.alphabet) ** self.length != modulus:
            raise ValueError("modulus doesn't match the alphabet size and code length")
        if self.x >= modulus or self.offset >= modulus:
            raise ValueError("state is outside of the modulus")
        if self.steps_taken > modulus:
            raise ValueError("more steps taken than the cycle has")
        return self


__all__ = [
    "U64_MAX",
    "SerializableSymbol",
    LcgParams.__name__,
    PartitionDescriptor.__name__,
    GeneratorState.__name__,
]
