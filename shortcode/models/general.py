import enum


class ExhaustionStrategy(str, enum.Enum):
    INCREASE_LENGTH = "increase_length"
    CYCLE = "cycle"
    PANIC = "panic"


class AlphabetPreset(str, enum.Enum):
    NUMERIC = "numeric"
    LOWERCASE_ALPHANUMERIC = "lowercase_alphanumeric"
    ALPHANUMERIC = "alphanumeric"
    UPPERCASE = "uppercase"
    UNAMBIGUOUS = "unambiguous"


__all__ = [
    ExhaustionStrategy.__name__,
    AlphabetPreset.__name__,
]
