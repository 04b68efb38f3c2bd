from typing import Generic, Hashable, Iterable, TypeVar

_SymbolT = TypeVar("_SymbolT", bound=Hashable)


def encode_digits(index: int, base: int, length: int) -> list[int]:
    """Base-`base` digits of `index`, most significant first, padded to `length`."""
    if not 0 <= index < base**length:
        raise ValueError(f"{index} doesn't fit into {length} base-{base} digits")

    digits = [0] * length
    for pos in range(length - 1, -1, -1):
        index, digits[pos] = divmod(index, base)
    return digits


def decode_digits(digits: Iterable[int], base: int) -> int:
    value = 0
    for digit in digits:
        if not 0 <= digit < base:
            raise ValueError(f"{digit} isn't a base-{base} digit")
        value = value * base + digit
    return value


class AlphabetCodec(Generic[_SymbolT]):
    _alphabet: tuple[_SymbolT, ...]
    _digit_by_symbol: dict[_SymbolT, int]

    def __init__(self, alphabet: Iterable[_SymbolT]) -> None:
        self._alphabet = tuple(alphabet)
        if not self._alphabet:
            raise ValueError("alphabet must not be empty")

        self._digit_by_symbol = {}
        for digit, symbol in enumerate(self._alphabet):
            # duplicate symbols can't be told apart, the first one wins
            self._digit_by_symbol.setdefault(symbol, digit)

    @property
    def alphabet(self) -> tuple[_SymbolT, ...]:
        return self._alphabet

    @property
    def base(self) -> int:
        return len(self._alphabet)

    def encode(self, index: int, length: int) -> list[_SymbolT]:
        return [
            self._alphabet[digit] for digit in encode_digits(index, self.base, length)
        ]

    def decode(self, symbols: Iterable[_SymbolT]) -> int:
        digits: list[int] = []
        for symbol in symbols:
            try:
                digits.append(self._digit_by_symbol[symbol])
            except KeyError:
                raise ValueError(f"{symbol!r} isn't part of the alphabet") from None
        return decode_digits(digits, self.base)


__all__ = [
    "encode_digits",
    "decode_digits",
    AlphabetCodec.__name__,
]
