import dataclasses
from typing import Any


class CodeGeneratorError(Exception):
    ...


@dataclasses.dataclass(kw_only=True)
class ConfigurationOverflowError(CodeGeneratorError):
    alphabet_size: int
    length: int

    def __str__(self) -> str:
        return (
            f"{self.alphabet_size}^{self.length} codes don't fit into an unsigned"
            " 64-bit integer"
        )


@dataclasses.dataclass(kw_only=True)
class ExhaustedError(CodeGeneratorError):
    length: int
    modulus: int

    def __str__(self) -> str:
        return f"all {self.modulus} codes of length {self.length} have been issued"


@dataclasses.dataclass(kw_only=True)
class UnserializableAlphabetError(CodeGeneratorError):
    symbol: Any

    def __str__(self) -> str:
        return (
            f"can't save an alphabet containing {self.symbol!r}, only str, int, bool"
            " and float symbols survive a JSON round trip"
        )


@dataclasses.dataclass(kw_only=True)
class RepartitionError(CodeGeneratorError):
    stride: int

    def __str__(self) -> str:
        return f"generator is already one of {self.stride} partitions"


__all__ = [
    CodeGeneratorError.__name__,
    ConfigurationOverflowError.__name__,
    ExhaustedError.__name__,
    RepartitionError.__name__,
    UnserializableAlphabetError.__name__,
]
