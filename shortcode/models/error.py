from typing import Any

from pydantic import BaseModel, Field


class ErrorPayload(BaseModel):
    type: str
    message: str | None
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def configuration_overflow(cls, *, alphabet_size: int, length: int):
        return cls(
            type="config:overflow",
            message="the code space doesn't fit into an unsigned 64-bit integer",
            extra={"alphabet_size": alphabet_size, "length": length},
        )

    @classmethod
    def invalid_state(cls, message: str):
        return cls(type="config:invalid-state", message=message)

    @classmethod
    def exhausted(cls, *, length: int, modulus: int):
        return cls(
            type="generator:exhausted",
            message="all codes of the current length have been issued",
            extra={"length": length, "modulus": modulus},
        )

    @classmethod
    def repartition(cls, *, stride: int):
        return cls(
            type="generator:repartition",
            message="a partitioned generator can't be partitioned again",
            extra={"stride": stride},
        )

    @classmethod
    def not_textual(cls):
        return cls(
            type="generator:not-textual",
            message="only generators with a character alphabet can issue string codes",
        )

    @classmethod
    def generator_error(cls, exc: Exception):
        return cls(
            type="generator:error",
            message=str(exc),
            extra={"error": type(exc).__name__},
        )


__all__ = [
    ErrorPayload.__name__,
]
